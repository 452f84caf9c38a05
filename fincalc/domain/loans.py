from __future__ import annotations

from fincalc.config import (
    BUSINESS_LOAN_HIGH_ORIGINATION_PERCENT,
    BUSINESS_LOAN_HIGH_RATE_PERCENT,
    BUSINESS_LOAN_MAX_TERM_YEARS,
    HOME_EQUITY_HIGH_RATE_PERCENT,
    HOME_EQUITY_LENDER_CAP,
    HOME_EQUITY_TYPICAL_MAX_TERM_YEARS,
)
from fincalc.domain.errors import ValidationReport
from fincalc.schemas.loans import FeeSet


def validate_business_loan(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: int,
    fees: FeeSet | None = None,
) -> ValidationReport:
    fees = fees or FeeSet()
    report = ValidationReport()
    errors = report.errors

    if loan_amount <= 0:
        errors.append("Loan amount must be greater than 0")
    if annual_rate_percent < 0:
        errors.append("Interest rate cannot be negative")
    if annual_rate_percent > BUSINESS_LOAN_HIGH_RATE_PERCENT:
        report.warnings.append("Interest rate seems unusually high")
    if term_years <= 0:
        errors.append("Loan term must be greater than 0")
    if term_years > BUSINESS_LOAN_MAX_TERM_YEARS:
        errors.append(f"Loan term cannot exceed {BUSINESS_LOAN_MAX_TERM_YEARS} years")

    if fees.origination_fee < 0:
        errors.append("Origination fee cannot be negative")
    if (
        fees.origination_fee_type == "percentage"
        and fees.origination_fee > BUSINESS_LOAN_HIGH_ORIGINATION_PERCENT
    ):
        report.warnings.append(
            f"Origination fee percentage seems unusually high "
            f"(max {BUSINESS_LOAN_HIGH_ORIGINATION_PERCENT:g}%)"
        )
    if fees.documentation_fee < 0:
        errors.append("Documentation fee cannot be negative")
    if fees.other_fees < 0:
        errors.append("Other fees cannot be negative")

    return report


def validate_home_equity_loan(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: int,
) -> ValidationReport:
    report = ValidationReport()

    if loan_amount <= 0:
        report.errors.append("Loan amount must be greater than 0")
    if loan_amount > HOME_EQUITY_LENDER_CAP:
        report.warnings.append("Most lenders cap home equity loans at $1,000,000")
    if annual_rate_percent < 0:
        report.errors.append("Interest rate cannot be negative")
    if annual_rate_percent > HOME_EQUITY_HIGH_RATE_PERCENT:
        report.warnings.append("Interest rate seems unusually high")
    if term_years <= 0:
        report.errors.append("Loan term must be greater than 0")
    if term_years > HOME_EQUITY_TYPICAL_MAX_TERM_YEARS:
        report.warnings.append(
            f"Loan term typically does not exceed {HOME_EQUITY_TYPICAL_MAX_TERM_YEARS} years"
        )

    return report
