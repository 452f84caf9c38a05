"""Data contracts for the rent and rent-vs-buy calculators."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class RentInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_rent: float
    utilities: float = 0.0
    insurance: float = 0.0
    parking: float = 0.0
    other_costs: float = 0.0
    discount_percent: float = 0.0
    tax_rate_percent: float = 0.0
    annual_increase_percent: float = 0.0
    years: int = 1


class RentCostBreakdown(BaseModel):
    rent: float
    utilities: float
    insurance: float
    parking: float
    other: float


class RentYear(BaseModel):
    year: int
    monthly_total: float
    annual_total: float


class RentResults(BaseModel):
    monthly_total: float
    annual_total: float
    cost_breakdown: RentCostBreakdown
    yearly_projection: List[RentYear]


class RentVsBuyInputs(BaseModel):
    """All rates are annual percentages; property tax and maintenance are of home value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Purchase
    home_price: float
    down_payment_percent: float = 20.0
    mortgage_rate_percent: float = 6.5
    loan_term_years: int = 30
    buying_closing_costs: float = 0.0
    property_tax_rate_percent: float = 1.2
    home_insurance_annual: float = 0.0
    hoa_fees_monthly: float = 0.0
    maintenance_percent: float = 1.0
    home_appreciation_percent: float = 3.0
    selling_closing_costs_percent: float = 6.0

    # Rental
    monthly_rent: float
    rent_increase_percent: float = 3.0
    renters_insurance_monthly: float = 0.0
    security_deposit: float = 0.0

    # Financial
    years_to_stay: int = 7
    marginal_tax_rate_percent: float = 0.0
    investment_return_percent: float = 5.0


class BuyCostBreakdown(BaseModel):
    down_payment: float
    closing_costs: float
    mortgage_payments: float
    property_tax: float
    insurance: float
    hoa: float
    maintenance: float
    selling_costs: float
    less_home_equity: float
    less_tax_savings: float


class RentingCostBreakdown(BaseModel):
    rent: float
    renters_insurance: float
    security_deposit: float


class RentVsBuyYear(BaseModel):
    year: int
    buy_monthly_avg: float
    rent_monthly: float
    cumulative_buy_cost: float
    cumulative_rent_cost: float
    home_equity: float


class RentVsBuyResults(BaseModel):
    total_buy_cost: float
    total_rent_cost: float
    net_difference: float
    better_option: Literal["Buying", "Renting"]
    break_even_year: Optional[int] = None

    down_payment_amount: float
    loan_amount: float
    monthly_mortgage_payment: float
    monthly_housing_cost: float
    total_interest_paid: float
    total_property_tax: float
    total_insurance: float
    total_hoa: float
    total_maintenance: float
    home_value_at_end: float
    home_equity: float
    total_tax_savings: float
    selling_costs: float

    total_rent_paid: float
    total_renters_insurance: float
    average_monthly_rent: float

    opportunity_cost: float

    total_buy_cost_breakdown: BuyCostBreakdown
    total_rent_cost_breakdown: RentingCostBreakdown
    yearly_breakdown: List[RentVsBuyYear]
