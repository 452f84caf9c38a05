from __future__ import annotations

from datetime import date
from typing import Optional

from fincalc.config import (
    MIN_BIRTH_YEAR,
    MIN_OWNER_AGE_YEARS,
    RMD_RETURN_RATE_BOUNDS,
    RMD_YEAR_FUTURE_WINDOW,
    RMD_YEAR_PAST_WINDOW,
)
from fincalc.core.rmd import is_rmd_required
from fincalc.domain.errors import ValidationReport
from fincalc.schemas.rmd import RMDProfile


def validate_rmd_profile(profile: RMDProfile, current_year: Optional[int] = None) -> ValidationReport:
    """Check an RMD profile against the calendar year the request is made in."""
    current_year = current_year or date.today().year
    report = ValidationReport()
    errors = report.errors

    if profile.birth_year < MIN_BIRTH_YEAR or profile.birth_year > current_year - MIN_OWNER_AGE_YEARS:
        errors.append("Invalid birth year")

    if (
        profile.rmd_year < current_year - RMD_YEAR_PAST_WINDOW
        or profile.rmd_year > current_year + RMD_YEAR_FUTURE_WINDOW
    ):
        errors.append(
            f"RMD year should be within {RMD_YEAR_PAST_WINDOW} years past "
            f"or {RMD_YEAR_FUTURE_WINDOW} years future"
        )

    if profile.account_balance < 0:
        errors.append("Account balance cannot be negative")

    if profile.has_spouse_beneficiary and profile.spouse_birth_year:
        if profile.spouse_birth_year < MIN_BIRTH_YEAR or profile.spouse_birth_year > current_year:
            errors.append("Invalid spouse birth year")

    if profile.estimated_return_rate is not None:
        low, high = RMD_RETURN_RATE_BOUNDS
        if profile.estimated_return_rate < low or profile.estimated_return_rate > high:
            errors.append(f"Return rate should be between {low:g}% and {high:g}%")

    if profile.years_to_project is not None and profile.years_to_project < 0:
        errors.append("Years to project cannot be negative")

    if not errors and not is_rmd_required(profile.birth_year, profile.rmd_year, as_of_year=current_year):
        report.warnings.append(
            f"No distribution is required yet at age {profile.rmd_year - profile.birth_year}"
        )

    return report
