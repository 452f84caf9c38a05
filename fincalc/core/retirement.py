from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fincalc.config import SAFE_WITHDRAWAL_RATE_PERCENT
from fincalc.schemas.retirement import (
    Phase,
    RetirementIncome,
    RetirementProfile,
    RetirementResults,
    YearProjection,
)

logger = logging.getLogger(__name__)


# -----------------------------
# Time-value helpers (rates in percent)
# -----------------------------


def future_value(present_value: float, annual_rate_percent: float, years: float) -> float:
    return present_value * (1 + annual_rate_percent / 100) ** years


def future_value_of_annuity(payment: float, annual_rate_percent: float, years: float) -> float:
    """Year-end contributions of ``payment`` compounded annually."""
    if annual_rate_percent == 0:
        return payment * years
    r = annual_rate_percent / 100
    return payment * (((1 + r) ** years - 1) / r)


def present_value(future_amount: float, annual_rate_percent: float, years: float) -> float:
    return future_amount / (1 + annual_rate_percent / 100) ** years


def inflate(amount: float, years: float, inflation_rate_percent: float) -> float:
    return amount * (1 + inflation_rate_percent / 100) ** years


def required_savings(
    desired_annual_income: float,
    social_security_income: float,
    other_income: float,
    withdrawal_rate_percent: float = SAFE_WITHDRAWAL_RATE_PERCENT,
) -> float:
    """Nest egg whose sustainable withdrawal covers the income not met by other sources."""
    income_gap = max(0.0, desired_annual_income - social_security_income - other_income)
    if income_gap == 0:
        return 0.0
    return income_gap / (withdrawal_rate_percent / 100)


def monthly_contribution_needed(
    target_amount: float,
    current_savings: float,
    years: int,
    annual_return_percent: float,
    employer_match_percentage: float,
) -> float:
    """
    Level monthly deposit that closes the gap between the grown current savings
    and ``target_amount``, net of the employer match.

    With no months left to save there is nothing to solve for; the gap shows up
    as the shortfall instead and this returns 0.
    """
    amount_needed = max(0.0, target_amount - future_value(current_savings, annual_return_percent, years))
    months = years * 12
    if amount_needed == 0 or months <= 0:
        return 0.0

    match_factor = 1 + employer_match_percentage / 100
    r = annual_return_percent / 100 / 12
    if r == 0:
        return amount_needed / months / match_factor

    payment = amount_needed * r / ((1 + r) ** months - 1)
    return payment / match_factor


def safe_withdrawal_amount(total_savings: float, withdrawal_rate_percent: float = SAFE_WITHDRAWAL_RATE_PERCENT) -> float:
    return total_savings * (withdrawal_rate_percent / 100)


def retirement_income(
    total_savings: float,
    withdrawal_rate_percent: float,
    social_security_income: float,
    other_income: float,
) -> RetirementIncome:
    withdrawal = safe_withdrawal_amount(total_savings, withdrawal_rate_percent)
    total_annual = withdrawal + social_security_income + other_income
    return RetirementIncome(
        withdrawal_amount=withdrawal,
        social_security=social_security_income,
        other_income=other_income,
        total_annual_income=total_annual,
        total_monthly_income=total_annual / 12,
    )


# -----------------------------
# Year-by-year projection
# -----------------------------


def phase_for_age(age: int, retirement_age: int) -> Phase:
    # The retirement-age year itself still accumulates; drawdown starts the year after.
    return Phase.RETIREMENT if age > retirement_age else Phase.ACCUMULATION


def project_year_by_year(profile: RetirementProfile, current_year: Optional[int] = None) -> List[YearProjection]:
    """
    One row per age from current_age + 1 through life_expectancy.

    Accumulation years:
      contribution and employer match are flat (not inflation-indexed);
      return is earned on the opening balance.
    Retirement years:
      expenses = desired income inflated for the years since retirement;
      withdrawal covers what social security and other income do not;
      balance is floored at 0 and simply stays there once exhausted.

    Balance and investment return are rounded to whole dollars in the rows
    only; the running balance is carried unrounded.
    """
    year0 = current_year or datetime.now().year
    balance = float(profile.current_savings)
    rows: List[YearProjection] = []

    for step in range(1, profile.life_expectancy - profile.current_age + 1):
        age = profile.current_age + step
        phase = phase_for_age(age, profile.retirement_age)

        contribution = employer_match = withdrawal = 0.0
        social_security = other_income = expenses = 0.0

        # ---------- Accumulation ----------
        if phase is Phase.ACCUMULATION:
            contribution = profile.annual_contribution
            employer_match = contribution * (profile.employer_match_percentage / 100)
            investment_return = balance * (profile.pre_retirement_return_percent / 100)
            balance = balance + contribution + employer_match + investment_return

        # ---------- Retirement ----------
        else:
            expenses = inflate(
                profile.desired_annual_income,
                age - profile.retirement_age,
                profile.inflation_rate_percent,
            )
            social_security = profile.social_security_income
            other_income = profile.other_income
            withdrawal = max(0.0, expenses - social_security - other_income)
            investment_return = balance * (profile.post_retirement_return_percent / 100)
            balance = max(0.0, balance + investment_return - withdrawal)

        total_income = withdrawal + social_security + other_income
        rows.append(
            YearProjection(
                age=age,
                year=year0 + step,
                phase=phase,
                balance=round(balance),
                contribution=contribution,
                employer_match=employer_match,
                investment_return=round(investment_return),
                withdrawal=withdrawal,
                social_security=social_security,
                other_income=other_income,
                total_income=total_income,
                inflation_adjusted_expenses=expenses,
                surplus=total_income - expenses,
            )
        )

    return rows


# -----------------------------
# Full result set
# -----------------------------


def project_retirement(profile: RetirementProfile, current_year: Optional[int] = None) -> RetirementResults:
    """
    Aggregate retirement outlook plus the year-by-year table.

    Assumes ``profile`` already passed ``validate_retirement_profile``; nothing
    is re-checked here.
    """
    years_to_retirement = max(0, profile.retirement_age - profile.current_age)
    years_in_retirement = profile.life_expectancy - profile.retirement_age
    is_retired = profile.current_age >= profile.retirement_age
    pre_rate = profile.pre_retirement_return_percent
    withdrawal_rate = SAFE_WITHDRAWAL_RATE_PERCENT

    logger.debug(
        "projecting retirement: age %d -> %d, life expectancy %d",
        profile.current_age,
        profile.retirement_age,
        profile.life_expectancy,
    )

    # Savings at retirement
    total_annual_contribution = profile.annual_contribution * (1 + profile.employer_match_percentage / 100)
    if is_retired:
        fv_current = profile.current_savings
        fv_contributions = 0.0
    else:
        fv_current = future_value(profile.current_savings, pre_rate, years_to_retirement)
        fv_contributions = future_value_of_annuity(total_annual_contribution, pre_rate, years_to_retirement)
    total_at_retirement = fv_current + fv_contributions

    # Need at retirement
    inflation_adjusted_income = inflate(
        profile.desired_annual_income, years_to_retirement, profile.inflation_rate_percent
    )
    required = required_savings(
        inflation_adjusted_income,
        profile.social_security_income,
        profile.other_income,
        withdrawal_rate,
    )
    monthly_needed = monthly_contribution_needed(
        required,
        profile.current_savings,
        years_to_retirement,
        pre_rate,
        profile.employer_match_percentage,
    )

    income = retirement_income(
        total_at_retirement,
        withdrawal_rate,
        profile.social_security_income,
        profile.other_income,
    )
    income_gap = max(0.0, inflation_adjusted_income - income.total_annual_income)
    surplus_or_shortfall = total_at_retirement - required

    total_contributions = profile.current_savings + profile.annual_contribution * years_to_retirement
    total_employer_match = (
        profile.annual_contribution * (profile.employer_match_percentage / 100) * years_to_retirement
    )

    return RetirementResults(
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        is_retired=is_retired,
        future_value_of_current_savings=fv_current,
        future_value_of_contributions=fv_contributions,
        total_at_retirement=total_at_retirement,
        total_annual_contribution=total_annual_contribution,
        required_savings_at_retirement=required,
        monthly_contribution_needed=monthly_needed,
        annual_contribution_needed=monthly_needed * 12,
        projected_annual_income=income.total_annual_income,
        withdrawal_amount=income.withdrawal_amount,
        total_retirement_income=income.total_annual_income,
        income_gap=income_gap,
        inflation_adjusted_income=inflation_adjusted_income,
        inflation_adjusted_expenses=inflation_adjusted_income,
        real_pre_retirement_return=pre_rate - profile.inflation_rate_percent,
        real_post_retirement_return=profile.post_retirement_return_percent - profile.inflation_rate_percent,
        can_retire_comfortably=total_at_retirement >= required,
        shortfall=max(0.0, -surplus_or_shortfall),
        surplus_or_shortfall=surplus_or_shortfall,
        withdrawal_rate=withdrawal_rate,
        sustainable_withdrawal_amount=safe_withdrawal_amount(total_at_retirement, withdrawal_rate),
        year_by_year_projection=project_year_by_year(profile, current_year),
        total_contributions=total_contributions,
        total_employer_match=total_employer_match,
        total_interest_earned=total_at_retirement - total_contributions - total_employer_match,
        percentage_of_income_replaced=(
            income.total_annual_income / profile.current_income * 100 if profile.current_income > 0 else 0.0
        ),
        savings_multiple=(
            total_at_retirement / profile.desired_annual_income if profile.desired_annual_income > 0 else 0.0
        ),
    )


__all__ = [
    "future_value",
    "future_value_of_annuity",
    "inflate",
    "monthly_contribution_needed",
    "phase_for_age",
    "present_value",
    "project_retirement",
    "project_year_by_year",
    "required_savings",
    "retirement_income",
    "safe_withdrawal_amount",
]
