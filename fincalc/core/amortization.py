"""Fixed-payment amortization shared by every loan calculator."""

from __future__ import annotations

import logging
from typing import List

from fincalc.config import BALANCE_TOLERANCE
from fincalc.domain.errors import InvalidInputError
from fincalc.schemas.loans import (
    AmortizationRow,
    AmortizationSchedule,
    AnnualSummaryRow,
    LoanTerms,
)

logger = logging.getLogger(__name__)


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def _growth(r: float, periods: int) -> float:
    try:
        return (1 + r) ** periods
    except OverflowError:
        raise InvalidInputError(
            "annual_rate_percent", "interest rate is too high to amortize over this term"
        ) from None


def level_payment(principal: float, annual_rate_percent: float, number_of_payments: int) -> float:
    """
    Constant payment that retires ``principal`` in ``number_of_payments`` months.

        PMT = P * r(1 + r)^n / ((1 + r)^n - 1),  r = annual% / 100 / 12

    Falls back to straight-line P / n at a zero rate. Only a rate whose
    compounding overflows a float is rejected; see ``amortize`` for the
    validated entry point.
    """
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return principal / number_of_payments
    growth = _growth(r, number_of_payments)
    return principal * (r * growth) / (growth - 1)


def remaining_balance(
    principal: float,
    annual_rate_percent: float,
    number_of_payments: int,
    payments_made: int,
) -> float:
    """Closed-form balance left after ``payments_made`` level payments."""
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return max(0.0, principal * (1 - payments_made / number_of_payments))
    growth_total = _growth(r, number_of_payments)
    growth_paid = _growth(r, payments_made)
    return max(0.0, principal * (growth_total - growth_paid) / (growth_total - 1))


def _check_terms(principal: float, annual_rate_percent: float, number_of_payments: int) -> None:
    if principal <= 0:
        raise InvalidInputError("principal", "loan amount must be greater than 0")
    if annual_rate_percent < 0:
        raise InvalidInputError("annual_rate_percent", "interest rate cannot be negative")
    if number_of_payments <= 0:
        raise InvalidInputError("number_of_payments", "loan term must be greater than 0")


def amortize(principal: float, annual_rate_percent: float, number_of_payments: int) -> AmortizationSchedule:
    """
    Build the month-by-month schedule for a fully amortizing fixed-rate loan.

    Order of operations (per month):
      1) interest = opening balance * monthly rate
      2) principal portion = payment - interest
      3) balance -= principal portion, floored at 0

    The final balance is snapped to exactly 0 when float drift leaves less than
    a cent outstanding.

    Raises InvalidInputError naming the offending argument.
    """
    _check_terms(principal, annual_rate_percent, number_of_payments)

    r = monthly_rate(annual_rate_percent)
    payment = level_payment(principal, annual_rate_percent, number_of_payments)
    logger.debug(
        "amortizing %.2f at %.4f%% over %d payments (payment %.2f)",
        principal,
        annual_rate_percent,
        number_of_payments,
        payment,
    )

    rows: List[AmortizationRow] = []
    balance = float(principal)
    cumulative_principal = 0.0
    cumulative_interest = 0.0

    for month in range(1, number_of_payments + 1):
        interest = balance * r
        principal_portion = payment - interest

        balance = max(0.0, balance - principal_portion)
        if month == number_of_payments and balance < BALANCE_TOLERANCE:
            balance = 0.0

        cumulative_principal += principal_portion
        cumulative_interest += interest

        rows.append(
            AmortizationRow(
                month=month,
                payment=payment,
                principal_portion=principal_portion,
                interest_portion=interest,
                ending_balance=balance,
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
            )
        )

    total_payments = payment * number_of_payments
    return AmortizationSchedule(
        payment=payment,
        number_of_payments=number_of_payments,
        total_payments=total_payments,
        total_interest=total_payments - principal,
        schedule=rows,
    )


def amortize_terms(terms: LoanTerms) -> AmortizationSchedule:
    return amortize(terms.principal, terms.annual_rate_percent, terms.term_months)


def annual_summary(schedule: List[AmortizationRow]) -> List[AnnualSummaryRow]:
    """Roll monthly rows up into loan years; a short final year keeps its partial months."""
    summary: List[AnnualSummaryRow] = []
    for start in range(0, len(schedule), 12):
        months = schedule[start : start + 12]
        summary.append(
            AnnualSummaryRow(
                year=start // 12 + 1,
                total_payment=sum(row.payment for row in months),
                total_principal=sum(row.principal_portion for row in months),
                total_interest=sum(row.interest_portion for row in months),
                ending_balance=months[-1].ending_balance,
            )
        )
    return summary


__all__ = [
    "amortize",
    "amortize_terms",
    "annual_summary",
    "level_payment",
    "monthly_rate",
    "remaining_balance",
]
