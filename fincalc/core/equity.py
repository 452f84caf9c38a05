"""Home equity, LTV/CLTV ratios and second-lien qualification."""

from __future__ import annotations

import logging

from fincalc.config import DEFAULT_MAX_LTV_PERCENT
from fincalc.core.amortization import amortize, annual_summary
from fincalc.formatting import format_currency
from fincalc.schemas.equity import (
    EquitySnapshot,
    HomeEquityLoanResult,
    QualificationReason,
    QualificationResult,
)

logger = logging.getLogger(__name__)


# A non-positive home value has no meaningful ratio; report 0 instead of dividing.
def calculate_ltv(mortgage_balance: float, home_value: float) -> float:
    if home_value <= 0:
        return 0.0
    return mortgage_balance / home_value * 100


def calculate_cltv(mortgage_balance: float, new_loan_amount: float, home_value: float) -> float:
    if home_value <= 0:
        return 0.0
    return (mortgage_balance + new_loan_amount) / home_value * 100


def calculate_max_borrowable(home_value: float, mortgage_balance: float, max_ltv_percent: float) -> float:
    """Headroom under the LTV cap, never negative."""
    return max(0.0, home_value * max_ltv_percent / 100 - mortgage_balance)


def analyze_equity(
    home_value: float,
    mortgage_balance: float,
    proposed_loan: float,
    max_ltv_percent: float = DEFAULT_MAX_LTV_PERCENT,
) -> EquitySnapshot:
    available = home_value - mortgage_balance
    return EquitySnapshot(
        home_value=home_value,
        mortgage_balance=mortgage_balance,
        proposed_loan_amount=proposed_loan,
        max_ltv_percent=max_ltv_percent,
        available_equity=available,
        current_ltv=calculate_ltv(mortgage_balance, home_value),
        cltv_after_loan=calculate_cltv(mortgage_balance, proposed_loan, home_value),
        max_borrowable=calculate_max_borrowable(home_value, mortgage_balance, max_ltv_percent),
        remaining_equity=available - proposed_loan,
    )


def check_qualification(
    home_value: float,
    mortgage_balance: float,
    requested_loan: float,
    max_ltv_percent: float = DEFAULT_MAX_LTV_PERCENT,
) -> QualificationResult:
    """
    Apply the LTV rules in order; the first one that fails decides the outcome.

      1) current LTV above the cap
      2) request above the max borrowable amount
      3) resulting CLTV above the cap
    """
    snapshot = analyze_equity(home_value, mortgage_balance, requested_loan, max_ltv_percent)

    if snapshot.current_ltv > max_ltv_percent:
        return QualificationResult(
            qualified=False,
            reason=QualificationReason.CURRENT_LTV_EXCEEDS_MAX,
            message=(
                f"Your current LTV of {snapshot.current_ltv:.1f}% exceeds the maximum allowed "
                f"{max_ltv_percent:g}%. You may not qualify for a home equity loan."
            ),
        )

    if requested_loan > snapshot.max_borrowable:
        return QualificationResult(
            qualified=False,
            reason=QualificationReason.EXCEEDS_MAX_BORROWABLE,
            message=(
                "The requested loan amount exceeds the maximum borrowable amount of "
                f"{format_currency(snapshot.max_borrowable)} based on {max_ltv_percent:g}% LTV limit."
            ),
        )

    if snapshot.cltv_after_loan > max_ltv_percent:
        return QualificationResult(
            qualified=False,
            reason=QualificationReason.CLTV_EXCEEDS_LIMIT,
            message=(
                f"This loan would result in a CLTV of {snapshot.cltv_after_loan:.1f}%, "
                f"exceeding the {max_ltv_percent:g}% limit."
            ),
        )

    return QualificationResult(
        qualified=True,
        reason=QualificationReason.QUALIFIED,
        message="You appear to qualify for this home equity loan based on LTV requirements.",
    )


def calculate_home_equity_loan(
    home_value: float,
    mortgage_balance: float,
    loan_amount: float,
    annual_rate_percent: float,
    term_years: int,
    max_ltv_percent: float = DEFAULT_MAX_LTV_PERCENT,
) -> HomeEquityLoanResult:
    """Second-lien loan: repayment schedule plus the equity position it leaves behind."""
    amortized = amortize(loan_amount, annual_rate_percent, term_years * 12)
    qualification = check_qualification(home_value, mortgage_balance, loan_amount, max_ltv_percent)
    logger.debug("home equity loan %.2f qualification: %s", loan_amount, qualification.reason.value)

    return HomeEquityLoanResult(
        monthly_payment=amortized.payment,
        total_payment=amortized.total_payments,
        total_interest=amortized.total_interest,
        principal_amount=loan_amount,
        schedule=amortized.schedule,
        annual_summary=annual_summary(amortized.schedule),
        equity=analyze_equity(home_value, mortgage_balance, loan_amount, max_ltv_percent),
        qualification=qualification,
    )


__all__ = [
    "analyze_equity",
    "calculate_cltv",
    "calculate_home_equity_loan",
    "calculate_ltv",
    "calculate_max_borrowable",
    "check_qualification",
]
