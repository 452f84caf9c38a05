"""
Loan cost aggregation and the thin per-product calculators built on it.

Each product resolves its own principal and then hands off to
``fincalc.core.amortization``; nothing here re-implements the payment formula.
"""

from __future__ import annotations

import logging
from typing import Optional

from fincalc.core.amortization import amortize
from fincalc.domain.errors import InvalidInputError
from fincalc.schemas.loans import (
    AutoLoanInputs,
    AutoLoanResult,
    FeeSet,
    LoanCostResult,
    PersonalLoanResult,
)

logger = logging.getLogger(__name__)


def _check_fees(fees: FeeSet) -> None:
    for name in ("origination_fee", "documentation_fee", "other_fees"):
        if getattr(fees, name) < 0:
            raise InvalidInputError(name, f"{name.replace('_', ' ')} cannot be negative")


def approximate_apr(loan_amount: float, total_interest: float, total_fees: float, years: float) -> float:
    """Linear cost of borrowing per year, in percent. Not a Regulation Z APR."""
    if loan_amount <= 0 or years <= 0:
        return 0.0
    return (total_interest + total_fees) / loan_amount / years * 100


def calculate_loan_cost(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    fees: Optional[FeeSet] = None,
) -> LoanCostResult:
    """Payment, interest, fees and headline cost metrics for a term loan with closing costs."""
    fees = fees or FeeSet()
    _check_fees(fees)
    if term_years <= 0:
        raise InvalidInputError("term_years", "loan term must be greater than 0")

    amortized = amortize(principal, annual_rate_percent, term_years * 12)

    origination = fees.origination_fee_amount(principal)
    total_fees = fees.total(principal)
    total_interest = amortized.total_interest

    return LoanCostResult(
        loan_amount=principal,
        monthly_payment=amortized.payment,
        total_payments=amortized.total_payments,
        total_interest=total_interest,
        origination_fee_amount=origination,
        total_fees=total_fees,
        total_cost=principal + total_interest + total_fees,
        approximate_apr=approximate_apr(principal, total_interest, total_fees, term_years),
        effective_interest_rate=total_interest / principal * 100,
    )


def calculate_personal_loan(
    loan_amount: float,
    annual_rate_percent: float,
    term_months: int,
) -> PersonalLoanResult:
    amortized = amortize(loan_amount, annual_rate_percent, term_months)
    return PersonalLoanResult(
        loan_amount=loan_amount,
        monthly_payment=amortized.payment,
        total_payment=amortized.total_payments,
        total_interest=amortized.total_interest,
        schedule=amortized.schedule,
    )


def calculate_auto_loan(inputs: AutoLoanInputs) -> AutoLoanResult:
    """
    Vehicle loan with trade-in, sales tax and dealer fees.

    Tax and fees are either rolled into the financed amount or paid upfront,
    never charged as separate closing costs. ``total_cost`` is every loan
    payment plus the down payment.
    """
    for name in ("auto_price", "down_payment", "trade_in_value", "sales_tax_percent", "other_fees"):
        if getattr(inputs, name) < 0:
            raise InvalidInputError(name, f"{name.replace('_', ' ')} cannot be negative")

    price_after_trade = inputs.auto_price - inputs.trade_in_value
    tax_amount = price_after_trade * inputs.sales_tax_percent / 100

    if inputs.include_tax_fees_in_loan:
        loan_amount = price_after_trade + tax_amount + inputs.other_fees - inputs.down_payment
        upfront = inputs.down_payment
    else:
        loan_amount = price_after_trade - inputs.down_payment
        upfront = inputs.down_payment + tax_amount + inputs.other_fees

    logger.debug("auto loan financing %.2f (tax %.2f, upfront %.2f)", loan_amount, tax_amount, upfront)
    amortized = amortize(loan_amount, inputs.annual_rate_percent, inputs.term_months)

    return AutoLoanResult(
        price_after_trade_in=price_after_trade,
        tax_amount=tax_amount,
        total_loan_amount=loan_amount,
        upfront_payment=upfront,
        monthly_payment=amortized.payment,
        total_payments=amortized.total_payments,
        total_interest=amortized.total_interest,
        total_cost=amortized.total_payments + inputs.down_payment,
        schedule=amortized.schedule,
    )


__all__ = [
    "approximate_apr",
    "calculate_auto_loan",
    "calculate_loan_cost",
    "calculate_personal_loan",
]
