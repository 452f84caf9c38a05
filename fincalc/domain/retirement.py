from __future__ import annotations

from fincalc.config import (
    EMPLOYER_MATCH_UNUSUAL_PERCENT,
    INFLATION_RATE_BOUNDS,
    MAX_AGE,
    RETURN_RATE_BOUNDS,
)
from fincalc.domain.errors import ValidationReport
from fincalc.schemas.retirement import RetirementProfile


def _out_of(bounds: tuple[float, float], value: float) -> bool:
    low, high = bounds
    return value < low or value > high


def validate_retirement_profile(profile: RetirementProfile) -> ValidationReport:
    report = ValidationReport()
    errors = report.errors

    # Ages
    if profile.current_age < 0 or profile.current_age > MAX_AGE:
        errors.append(f"Current age must be between 0 and {MAX_AGE}")
    # already-retired profiles are allowed, within reason
    if profile.current_age - profile.retirement_age > 30:
        errors.append("Invalid retirement age for current age")
    if profile.retirement_age > profile.life_expectancy:
        errors.append("Retirement age cannot be greater than life expectancy")
    if profile.life_expectancy < profile.current_age:
        errors.append("Life expectancy must be greater than current age")
    if profile.life_expectancy > MAX_AGE:
        errors.append(f"Life expectancy cannot exceed {MAX_AGE} years")

    # Amounts
    if profile.current_savings < 0:
        errors.append("Current savings cannot be negative")
    if profile.annual_contribution < 0:
        errors.append("Annual contribution cannot be negative")
    if profile.employer_match_percentage < 0:
        errors.append("Employer match percentage cannot be negative")
    if profile.employer_match_percentage > EMPLOYER_MATCH_UNUSUAL_PERCENT:
        report.warnings.append("Employer match percentage over 100% is unusual")
    if profile.current_income < 0:
        errors.append("Current income cannot be negative")

    # Rates
    low, high = RETURN_RATE_BOUNDS
    if _out_of(RETURN_RATE_BOUNDS, profile.pre_retirement_return_percent):
        errors.append(f"Pre-retirement return rate should be between {low:g}% and {high:g}%")
    if _out_of(RETURN_RATE_BOUNDS, profile.post_retirement_return_percent):
        errors.append(f"Post-retirement return rate should be between {low:g}% and {high:g}%")
    if _out_of(INFLATION_RATE_BOUNDS, profile.inflation_rate_percent):
        low, high = INFLATION_RATE_BOUNDS
        errors.append(f"Inflation rate should be between {low:g}% and {high:g}%")

    # Income
    if profile.desired_annual_income < 0:
        errors.append("Desired annual income cannot be negative")
    if profile.social_security_income < 0:
        errors.append("Social Security income cannot be negative")
    if profile.other_income < 0:
        errors.append("Other income cannot be negative")

    return report
