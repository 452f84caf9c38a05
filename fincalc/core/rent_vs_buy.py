"""
Rent-versus-buy comparison over a holding period.

Buying cost = cash out (down payment, closing costs, mortgage payments,
property tax, insurance, HOA, maintenance, selling costs) minus the equity
recovered at sale and minus itemized tax savings. Renting cost = rent plus
renters insurance plus the return forgone on the security deposit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fincalc.config import BREAK_EVEN_HORIZON_YEARS, ITEMIZED_DEDUCTION_THRESHOLD
from fincalc.core.amortization import level_payment, monthly_rate, remaining_balance
from fincalc.domain.errors import InvalidInputError
from fincalc.schemas.rent import (
    BuyCostBreakdown,
    RentingCostBreakdown,
    RentVsBuyInputs,
    RentVsBuyResults,
    RentVsBuyYear,
)

logger = logging.getLogger(__name__)


def _check_inputs(inputs: RentVsBuyInputs) -> None:
    if inputs.home_price <= 0:
        raise InvalidInputError("home_price", "home price must be positive")
    if inputs.monthly_rent <= 0:
        raise InvalidInputError("monthly_rent", "monthly rent must be positive")
    if not 0 <= inputs.down_payment_percent <= 100:
        raise InvalidInputError("down_payment_percent", "down payment percent must be between 0 and 100")
    if inputs.years_to_stay <= 0:
        raise InvalidInputError("years_to_stay", "years to stay must be positive")
    if inputs.loan_term_years <= 0:
        raise InvalidInputError("loan_term_years", "loan term must be greater than 0")


def _down_payment(inputs: RentVsBuyInputs) -> float:
    return inputs.home_price * inputs.down_payment_percent / 100


def _loan_amount(inputs: RentVsBuyInputs) -> float:
    return inputs.home_price - _down_payment(inputs)


def _months(inputs: RentVsBuyInputs) -> int:
    return inputs.loan_term_years * 12


def mortgage_payment(inputs: RentVsBuyInputs) -> float:
    loan = _loan_amount(inputs)
    if loan <= 0:
        return 0.0
    return level_payment(loan, inputs.mortgage_rate_percent, _months(inputs))


def _balance_after(inputs: RentVsBuyInputs, months_paid: int) -> float:
    loan = _loan_amount(inputs)
    if loan <= 0:
        return 0.0
    return remaining_balance(loan, inputs.mortgage_rate_percent, _months(inputs), months_paid)


def yearly_interest(inputs: RentVsBuyInputs, year: int) -> float:
    """Mortgage interest paid during loan year ``year`` (1-based)."""
    if inputs.mortgage_rate_percent == 0 or _loan_amount(inputs) <= 0:
        return 0.0

    payment = mortgage_payment(inputs)
    r = monthly_rate(inputs.mortgage_rate_percent)
    start = (year - 1) * 12
    end = min(year * 12, _months(inputs))

    balance = _balance_after(inputs, start)
    total = 0.0
    for _ in range(start, end):
        interest = balance * r
        total += interest
        balance -= payment - interest
    return total


def _appreciation(inputs: RentVsBuyInputs, years: int) -> float:
    return (1 + inputs.home_appreciation_percent / 100) ** years


def home_value_at(inputs: RentVsBuyInputs, years: int) -> float:
    return inputs.home_price * _appreciation(inputs, years)


def home_equity(inputs: RentVsBuyInputs) -> float:
    months_paid = min(inputs.years_to_stay * 12, _months(inputs))
    return home_value_at(inputs, inputs.years_to_stay) - _balance_after(inputs, months_paid)


def tax_benefit(inputs: RentVsBuyInputs) -> float:
    """Savings from itemizing interest and property tax above the standard deduction."""
    savings = 0.0
    for year in range(1, inputs.years_to_stay + 1):
        property_tax = home_value_at(inputs, year - 1) * inputs.property_tax_rate_percent / 100
        deductible = yearly_interest(inputs, year) + property_tax
        if deductible > ITEMIZED_DEDUCTION_THRESHOLD:
            savings += (deductible - ITEMIZED_DEDUCTION_THRESHOLD) * inputs.marginal_tax_rate_percent / 100
    return savings


def _recurring_costs(inputs: RentVsBuyInputs) -> tuple[float, float, float, float]:
    """Property tax, insurance, HOA and maintenance summed over the stay."""
    property_tax = insurance = hoa = maintenance = 0.0
    for year in range(1, inputs.years_to_stay + 1):
        # insurance and HOA are escalated at the appreciation rate
        factor = _appreciation(inputs, year - 1)
        value = inputs.home_price * factor
        property_tax += value * inputs.property_tax_rate_percent / 100
        maintenance += value * inputs.maintenance_percent / 100
        insurance += inputs.home_insurance_annual * factor
        hoa += inputs.hoa_fees_monthly * 12 * factor
    return property_tax, insurance, hoa, maintenance


def _first_year_monthly_housing(inputs: RentVsBuyInputs) -> float:
    return (
        mortgage_payment(inputs)
        + inputs.home_price * inputs.property_tax_rate_percent / 100 / 12
        + inputs.home_insurance_annual / 12
        + inputs.hoa_fees_monthly
        + inputs.home_price * inputs.maintenance_percent / 100 / 12
    )


def total_buying_cost(inputs: RentVsBuyInputs) -> float:
    months_to_stay = min(inputs.years_to_stay * 12, _months(inputs))
    property_tax, insurance, hoa, maintenance = _recurring_costs(inputs)
    selling = home_value_at(inputs, inputs.years_to_stay) * inputs.selling_closing_costs_percent / 100

    return (
        _down_payment(inputs)
        + inputs.buying_closing_costs
        + mortgage_payment(inputs) * months_to_stay
        + property_tax
        + insurance
        + hoa
        + maintenance
        + selling
        - home_equity(inputs)
        - tax_benefit(inputs)
    )


def _rent_paid(inputs: RentVsBuyInputs) -> float:
    total = 0.0
    rent = inputs.monthly_rent
    for _ in range(inputs.years_to_stay):
        total += rent * 12
        rent *= 1 + inputs.rent_increase_percent / 100
    return total


def _deposit_opportunity_cost(inputs: RentVsBuyInputs) -> float:
    growth = (1 + inputs.investment_return_percent / 100) ** inputs.years_to_stay
    return inputs.security_deposit * (growth - 1)


def total_renting_cost(inputs: RentVsBuyInputs) -> float:
    return (
        _rent_paid(inputs)
        + inputs.renters_insurance_monthly * 12 * inputs.years_to_stay
        + _deposit_opportunity_cost(inputs)
    )


def opportunity_cost(inputs: RentVsBuyInputs) -> float:
    """
    Return forgone by buying: growth on the upfront cash, plus the invested
    value of each month in which renting would have been cheaper.
    """
    upfront = _down_payment(inputs) + inputs.buying_closing_costs
    upfront_growth = upfront * ((1 + inputs.investment_return_percent / 100) ** inputs.years_to_stay - 1)

    buying_monthly = _first_year_monthly_housing(inputs)
    total_months = inputs.years_to_stay * 12
    monthly_return = inputs.investment_return_percent / 100 / 12

    invested_savings = 0.0
    rent = inputs.monthly_rent
    for month in range(1, total_months + 1):
        if month > 1 and month % 12 == 1:
            rent *= 1 + inputs.rent_increase_percent / 100
        savings = buying_monthly - (rent + inputs.renters_insurance_monthly)
        if savings > 0:
            invested_savings += savings * (1 + monthly_return) ** (total_months - month)

    return upfront_growth + max(0.0, invested_savings)


def find_break_even_year(inputs: RentVsBuyInputs) -> Optional[int]:
    """First holding period (in years) over which buying is cheaper, or None within the horizon."""
    for year in range(1, BREAK_EVEN_HORIZON_YEARS + 1):
        trial = inputs.model_copy(update={"years_to_stay": year})
        if total_buying_cost(trial) < total_renting_cost(trial):
            return year
    return None


def calculate_rent_vs_buy(inputs: RentVsBuyInputs) -> RentVsBuyResults:
    _check_inputs(inputs)

    down_payment = _down_payment(inputs)
    loan = _loan_amount(inputs)
    payment = mortgage_payment(inputs)
    months_to_stay = min(inputs.years_to_stay * 12, _months(inputs))

    total_interest = sum(yearly_interest(inputs, year) for year in range(1, inputs.years_to_stay + 1))
    property_tax, insurance, hoa, maintenance = _recurring_costs(inputs)

    value_at_end = home_value_at(inputs, inputs.years_to_stay)
    selling = value_at_end * inputs.selling_closing_costs_percent / 100
    equity = home_equity(inputs)
    tax_savings = tax_benefit(inputs)
    forgone = opportunity_cost(inputs)

    buy_breakdown = BuyCostBreakdown(
        down_payment=down_payment,
        closing_costs=inputs.buying_closing_costs,
        mortgage_payments=payment * months_to_stay,
        property_tax=property_tax,
        insurance=insurance,
        hoa=hoa,
        maintenance=maintenance,
        selling_costs=selling,
        less_home_equity=-equity,
        less_tax_savings=-tax_savings,
    )
    total_buy = sum(buy_breakdown.model_dump().values()) + forgone

    rent_paid = _rent_paid(inputs)
    renters_insurance = inputs.renters_insurance_monthly * 12 * inputs.years_to_stay
    total_rent = rent_paid + renters_insurance + _deposit_opportunity_cost(inputs)

    yearly: List[RentVsBuyYear] = []
    for year in range(1, inputs.years_to_stay + 1):
        trial = inputs.model_copy(update={"years_to_stay": year})
        buy_cost = total_buying_cost(trial)
        yearly.append(
            RentVsBuyYear(
                year=year,
                buy_monthly_avg=buy_cost / (year * 12),
                rent_monthly=inputs.monthly_rent * (1 + inputs.rent_increase_percent / 100) ** (year - 1),
                cumulative_buy_cost=buy_cost,
                cumulative_rent_cost=total_renting_cost(trial),
                home_equity=home_equity(trial),
            )
        )

    better = "Buying" if total_buy < total_rent else "Renting"
    logger.debug("rent vs buy over %d years: buy %.2f, rent %.2f", inputs.years_to_stay, total_buy, total_rent)

    return RentVsBuyResults(
        total_buy_cost=total_buy,
        total_rent_cost=total_rent,
        net_difference=abs(total_buy - total_rent),
        better_option=better,
        break_even_year=find_break_even_year(inputs),
        down_payment_amount=down_payment,
        loan_amount=loan,
        monthly_mortgage_payment=payment,
        monthly_housing_cost=_first_year_monthly_housing(inputs),
        total_interest_paid=total_interest,
        total_property_tax=property_tax,
        total_insurance=insurance,
        total_hoa=hoa,
        total_maintenance=maintenance,
        home_value_at_end=value_at_end,
        home_equity=equity,
        total_tax_savings=tax_savings,
        selling_costs=selling,
        total_rent_paid=rent_paid,
        total_renters_insurance=renters_insurance,
        average_monthly_rent=rent_paid / (inputs.years_to_stay * 12),
        opportunity_cost=forgone,
        total_buy_cost_breakdown=buy_breakdown,
        total_rent_cost_breakdown=RentingCostBreakdown(
            rent=rent_paid,
            renters_insurance=renters_insurance,
            security_deposit=inputs.security_deposit,
        ),
        yearly_breakdown=yearly,
    )


__all__ = [
    "calculate_rent_vs_buy",
    "find_break_even_year",
    "home_equity",
    "mortgage_payment",
    "opportunity_cost",
    "tax_benefit",
    "total_buying_cost",
    "total_renting_cost",
    "yearly_interest",
]
