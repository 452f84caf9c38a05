"""Data contracts for the retirement projection."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class RetirementProfile(BaseModel):
    """
    Inputs for one retirement projection.

    Rates are percentages (7 means 7%). Numeric ranges are checked by
    ``fincalc.domain.retirement.validate_retirement_profile``, not here, so an
    out-of-range profile can still be built and reported on.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    current_age: int
    retirement_age: int
    life_expectancy: int
    current_savings: float = 0.0
    annual_contribution: float = 0.0
    employer_match_percentage: float = 0.0
    current_income: float = 0.0
    pre_retirement_return_percent: float = 7.0
    post_retirement_return_percent: float = 5.0
    inflation_rate_percent: float = 3.0
    desired_annual_income: float = 0.0
    social_security_income: float = 0.0
    other_income: float = 0.0


class Phase(str, Enum):
    ACCUMULATION = "accumulation"
    RETIREMENT = "retirement"


class YearProjection(BaseModel):
    age: int
    year: int
    phase: Phase
    balance: float
    contribution: float
    employer_match: float
    investment_return: float
    withdrawal: float
    social_security: float
    other_income: float
    total_income: float
    inflation_adjusted_expenses: float
    surplus: float


class RetirementIncome(BaseModel):
    withdrawal_amount: float
    social_security: float
    other_income: float
    total_annual_income: float
    total_monthly_income: float


class RetirementResults(BaseModel):
    # Time
    years_to_retirement: int
    years_in_retirement: int
    is_retired: bool

    # Savings
    future_value_of_current_savings: float
    future_value_of_contributions: float
    total_at_retirement: float
    total_annual_contribution: float

    # Required amounts
    required_savings_at_retirement: float
    monthly_contribution_needed: float
    annual_contribution_needed: float

    # Income
    projected_annual_income: float
    withdrawal_amount: float
    total_retirement_income: float
    income_gap: float

    # Inflation
    inflation_adjusted_income: float
    inflation_adjusted_expenses: float
    real_pre_retirement_return: float
    real_post_retirement_return: float

    # Outcome
    can_retire_comfortably: bool
    shortfall: float
    surplus_or_shortfall: float
    withdrawal_rate: float
    sustainable_withdrawal_amount: float

    year_by_year_projection: List[YearProjection]

    # Summary
    total_contributions: float
    total_employer_match: float
    total_interest_earned: float
    percentage_of_income_replaced: float
    savings_multiple: float
