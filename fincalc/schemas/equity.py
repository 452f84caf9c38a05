"""Data contracts for home equity and LTV analysis."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from fincalc.config import DEFAULT_MAX_LTV_PERCENT
from fincalc.schemas.loans import AmortizationRow, AnnualSummaryRow


class EquitySnapshot(BaseModel):
    """
    Equity position of a home before and after a proposed second loan.

    ``available_equity`` and ``remaining_equity`` may be negative when the
    mortgage balance exceeds the home value.
    """

    home_value: float
    mortgage_balance: float
    proposed_loan_amount: float
    max_ltv_percent: float
    available_equity: float
    current_ltv: float
    cltv_after_loan: float
    max_borrowable: float = Field(..., ge=0)
    remaining_equity: float


class QualificationReason(str, Enum):
    QUALIFIED = "qualified"
    CURRENT_LTV_EXCEEDS_MAX = "current_ltv_exceeds_max"
    EXCEEDS_MAX_BORROWABLE = "exceeds_max_borrowable"
    CLTV_EXCEEDS_LIMIT = "cltv_exceeds_limit"


class QualificationResult(BaseModel):
    qualified: bool
    reason: QualificationReason
    message: str


class HomeEquityRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    home_value: float
    mortgage_balance: float
    loan_amount: float
    annual_rate_percent: float
    term_years: int
    max_ltv_percent: float = DEFAULT_MAX_LTV_PERCENT


class HomeEquityLoanResult(BaseModel):
    monthly_payment: float
    total_payment: float
    total_interest: float
    principal_amount: float
    schedule: List[AmortizationRow]
    annual_summary: List[AnnualSummaryRow]
    equity: EquitySnapshot
    qualification: QualificationResult
