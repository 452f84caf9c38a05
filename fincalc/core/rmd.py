"""
Required Minimum Distribution (RMD) rules and IRS life-expectancy tables.

Start ages follow SECURE Act 2.0:

* born before 1951: 72
* born 1951-1959: 73
* born 1960 or later: 75, but only from calendar year 2033; before then the
  cohort is still treated as 73.

The first distribution may be deferred to April 1 of the year after the start
year; every later one is due December 31 of its own year.

Example
-------

>>> round(calculate_rmd(RMDProfile(birth_year=1951, rmd_year=2024, account_balance=100_000)).rmd_amount, 2)
3773.58
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from fincalc.config import MAX_RMD_AGE, SECURE_2_0_AGE_75_YEAR
from fincalc.schemas.rmd import (
    DistributionPeriod,
    LifeTable,
    PeriodSource,
    RMDProfile,
    RMDResults,
    RMDYearProjection,
)

logger = logging.getLogger(__name__)

# IRS Publication 590-B, Uniform Lifetime Table (2022 update), ages 72-120.
UNIFORM_LIFETIME_TABLE: Dict[int, float] = {
    72: 27.4, 73: 26.5, 74: 25.5, 75: 24.6, 76: 23.7, 77: 22.9, 78: 22.0, 79: 21.1,
    80: 20.2, 81: 19.4, 82: 18.5, 83: 17.7, 84: 16.8, 85: 16.0, 86: 15.2, 87: 14.4,
    88: 13.7, 89: 12.9, 90: 12.2, 91: 11.5, 92: 10.8, 93: 10.1, 94: 9.5, 95: 8.9,
    96: 8.4, 97: 7.8, 98: 7.3, 99: 6.8, 100: 6.4, 101: 6.0, 102: 5.6, 103: 5.2,
    104: 4.9, 105: 4.6, 106: 4.3, 107: 4.1, 108: 3.9, 109: 3.7, 110: 3.5, 111: 3.4,
    112: 3.3, 113: 3.1, 114: 3.0, 115: 2.9, 116: 2.8, 117: 2.7, 118: 2.5, 119: 2.3,
    120: 2.0,
}

# Single Life Table, sparse subset used for beneficiaries.
SINGLE_LIFE_TABLE: Dict[int, float] = {
    0: 84.6, 1: 83.7, 5: 79.7, 10: 74.8, 15: 69.9, 20: 65.0, 25: 60.2, 30: 55.3,
    35: 50.5, 40: 45.7, 45: 41.0, 50: 36.2, 55: 31.6, 60: 27.1, 65: 22.9, 70: 19.0,
    71: 18.0, 72: 17.1, 73: 16.2, 74: 15.3, 75: 14.5, 76: 13.6, 77: 12.8, 78: 12.0,
    79: 11.2, 80: 10.5, 81: 9.8, 82: 9.1, 83: 8.5, 84: 7.9, 85: 7.3, 86: 6.8,
    87: 6.3, 88: 5.8, 89: 5.4, 90: 5.0, 91: 4.6, 92: 4.3, 93: 4.0, 94: 3.7,
    95: 3.5, 96: 3.3, 97: 3.0, 98: 2.8, 99: 2.6, 100: 2.5, 105: 1.8, 110: 1.3,
    111: 1.1,
}

# Joint Life and Last Survivor Table, sample keyed by (owner age, spouse age).
JOINT_LIFE_TABLE: Dict[Tuple[int, int], float] = {
    (73, 60): 28.6, (73, 61): 27.7, (73, 62): 26.8, (73, 63): 25.9,
    (74, 60): 27.7, (74, 61): 26.8, (74, 62): 25.9, (74, 63): 25.0,
    (75, 60): 26.8, (75, 61): 25.9, (75, 62): 25.0, (75, 63): 24.1, (75, 64): 23.3, (75, 65): 22.4,
    (76, 60): 25.9, (76, 61): 25.0, (76, 62): 24.1, (76, 63): 23.3, (76, 64): 22.4, (76, 65): 21.6,
    (77, 60): 25.0, (77, 61): 24.2, (77, 62): 23.3, (77, 63): 22.5, (77, 64): 21.6, (77, 65): 20.8,
    (80, 60): 22.5, (80, 65): 18.4, (80, 70): 15.0,
}

SPOUSE_AGE_GAP_FOR_JOINT_TABLE = 10
_SINGLE_LIFE_DEFAULT = 40.0
_UNIFORM_FLOOR = 2.0


def rmd_start_age(birth_year: int, as_of_year: Optional[int] = None) -> int:
    """Age at which distributions begin, judged from the calendar year ``as_of_year``."""
    if birth_year < 1951:
        return 72
    if birth_year <= 1959:
        return 73
    as_of_year = as_of_year or date.today().year
    if as_of_year >= SECURE_2_0_AGE_75_YEAR:
        return 75
    return 73


def first_rmd_year(birth_year: int, as_of_year: Optional[int] = None) -> int:
    return birth_year + rmd_start_age(birth_year, as_of_year)


def is_rmd_required(birth_year: int, year: int, as_of_year: Optional[int] = None) -> bool:
    return year - birth_year >= rmd_start_age(birth_year, as_of_year)


def rmd_deadline(birth_year: int, rmd_year: int, as_of_year: Optional[int] = None) -> str:
    if rmd_year == first_rmd_year(birth_year, as_of_year):
        return f"April 1, {rmd_year + 1}"
    return f"December 31, {rmd_year}"


def uniform_divisor(age: int) -> float:
    # Ages missing from the table (including those under 72) take the age-120 divisor.
    if age in UNIFORM_LIFETIME_TABLE:
        return UNIFORM_LIFETIME_TABLE[age]
    if age > MAX_RMD_AGE:
        return _UNIFORM_FLOOR
    return UNIFORM_LIFETIME_TABLE[MAX_RMD_AGE]


def distribution_period(
    owner_age: int,
    has_spouse_beneficiary: bool = False,
    spouse_age: Optional[int] = None,
) -> DistributionPeriod:
    """
    Pick the divisor for one distribution year.

    A spouse beneficiary more than ten years younger moves the lookup to the
    Joint Life table. When the (owner, spouse) pair is missing from the sample,
    the period is estimated as the smaller of the spouse's Single Life divisor
    and the owner's Uniform divisor and tagged ``fallback``.
    """
    if has_spouse_beneficiary and spouse_age is not None:
        if owner_age - spouse_age > SPOUSE_AGE_GAP_FOR_JOINT_TABLE:
            joint = JOINT_LIFE_TABLE.get((owner_age, spouse_age))
            if joint:
                return DistributionPeriod(period=joint, table=LifeTable.JOINT, source=PeriodSource.EXACT)

            spouse_period = SINGLE_LIFE_TABLE.get(spouse_age) or _SINGLE_LIFE_DEFAULT
            owner_period = UNIFORM_LIFETIME_TABLE.get(owner_age) or _UNIFORM_FLOOR
            logger.debug("joint table miss for %d/%d, estimating", owner_age, spouse_age)
            return DistributionPeriod(
                period=min(spouse_period, owner_period),
                table=LifeTable.JOINT,
                source=PeriodSource.FALLBACK,
            )

    source = PeriodSource.EXACT if owner_age in UNIFORM_LIFETIME_TABLE else PeriodSource.FALLBACK
    return DistributionPeriod(period=uniform_divisor(owner_age), table=LifeTable.UNIFORM, source=source)


def rmd_amount(account_balance: float, period: float) -> float:
    if period == 0:
        return 0.0
    return account_balance / period


def project_rmds(
    initial_balance: float,
    start_age: int,
    start_year: int,
    years_to_project: int,
    annual_return_percent: float = 0.0,
    has_spouse_beneficiary: bool = False,
    initial_spouse_age: Optional[int] = None,
) -> List[RMDYearProjection]:
    """
    Roll the account forward one distribution year at a time.

    Each year takes that year's RMD first and grows what is left; the run stops
    at age 120 or as soon as the balance is exhausted.
    """
    rows: List[RMDYearProjection] = []
    balance = initial_balance
    rate = annual_return_percent / 100
    effective_years = min(years_to_project, MAX_RMD_AGE - start_age)

    for offset in range(effective_years):
        age = start_age + offset
        spouse_age = initial_spouse_age + offset if initial_spouse_age is not None else None
        period = distribution_period(age, has_spouse_beneficiary, spouse_age).period

        amount = rmd_amount(balance, period)
        after_rmd = max(0.0, balance - amount)
        earnings = after_rmd * rate
        ending = after_rmd + earnings

        rows.append(
            RMDYearProjection(
                year=start_year + offset,
                age=age,
                beginning_balance=balance,
                distribution_period=period,
                rmd_amount=amount,
                earnings=earnings,
                ending_balance=ending,
            )
        )

        balance = ending
        if balance <= 0:
            break

    return rows


def calculate_rmd(profile: RMDProfile, as_of_year: Optional[int] = None) -> RMDResults:
    """
    RMD for ``profile.rmd_year`` with optional multi-year projection.

    Assumes ``profile`` already passed ``validate_rmd_profile``.
    """
    owner_age = profile.rmd_year - profile.birth_year
    start_age = rmd_start_age(profile.birth_year, as_of_year)
    start_year = profile.birth_year + start_age

    spouse_age = None
    if profile.has_spouse_beneficiary and profile.spouse_birth_year:
        spouse_age = profile.rmd_year - profile.spouse_birth_year

    period = distribution_period(owner_age, profile.has_spouse_beneficiary, spouse_age)

    results = RMDResults(
        owner_age=owner_age,
        spouse_age=spouse_age,
        distribution_period=period.period,
        table_used=period.table,
        period_source=period.source,
        rmd_amount=rmd_amount(profile.account_balance, period.period),
        rmd_required=owner_age >= start_age,
        rmd_start_age=start_age,
        rmd_start_year=start_year,
        first_rmd_deadline=f"April 1, {start_year + 1}",
        rmd_deadline=rmd_deadline(profile.birth_year, profile.rmd_year, as_of_year),
    )

    if profile.years_to_project and profile.years_to_project > 0:
        projections = project_rmds(
            profile.account_balance,
            owner_age,
            profile.rmd_year,
            profile.years_to_project,
            profile.estimated_return_rate or 0.0,
            profile.has_spouse_beneficiary,
            spouse_age,
        )
        if projections:
            total = sum(row.rmd_amount for row in projections)
            results = results.model_copy(
                update={
                    "projections": projections,
                    "total_rmds": total,
                    "final_balance": projections[-1].ending_balance,
                    "average_rmd": total / len(projections),
                }
            )

    return results


__all__ = [
    "JOINT_LIFE_TABLE",
    "SINGLE_LIFE_TABLE",
    "UNIFORM_LIFETIME_TABLE",
    "calculate_rmd",
    "distribution_period",
    "first_rmd_year",
    "is_rmd_required",
    "project_rmds",
    "rmd_amount",
    "rmd_deadline",
    "rmd_start_age",
    "uniform_divisor",
]
