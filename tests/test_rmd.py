from __future__ import annotations

import pytest

from fincalc.core.rmd import (
    calculate_rmd,
    distribution_period,
    first_rmd_year,
    is_rmd_required,
    project_rmds,
    rmd_amount,
    rmd_deadline,
    rmd_start_age,
    uniform_divisor,
)
from fincalc.schemas.rmd import LifeTable, PeriodSource

from conftest import make_rmd_profile


def test_first_year_for_1951_cohort(rmd_profile):
    results = calculate_rmd(rmd_profile, as_of_year=2024)

    assert results.owner_age == 73
    assert results.distribution_period == 26.5
    assert results.table_used is LifeTable.UNIFORM
    assert results.period_source is PeriodSource.EXACT
    assert results.rmd_amount == pytest.approx(3773.58, abs=0.01)
    assert results.rmd_required
    assert results.rmd_start_year == 2024
    assert results.first_rmd_deadline == "April 1, 2025"
    assert results.rmd_deadline == "April 1, 2025"
    assert results.projections == []


@pytest.mark.parametrize(
    "birth_year, as_of_year, expected",
    [
        (1945, 2024, 72),
        (1950, 2024, 72),
        (1951, 2024, 73),
        (1959, 2040, 73),
        (1960, 2024, 73),
        (1960, 2032, 73),
        (1960, 2033, 75),
        (1965, 2040, 75),
    ],
)
def test_start_age_policy(birth_year, as_of_year, expected):
    assert rmd_start_age(birth_year, as_of_year) == expected


def test_required_and_deadlines():
    assert first_rmd_year(1951, 2024) == 2024
    assert not is_rmd_required(1952, 2024, 2024)
    assert is_rmd_required(1950, 2024, 2024)
    assert rmd_deadline(1951, 2024, 2024) == "April 1, 2025"
    assert rmd_deadline(1951, 2025, 2024) == "December 31, 2025"


def test_uniform_divisor_outside_table():
    assert uniform_divisor(72) == 27.4
    assert uniform_divisor(120) == 2.0
    assert uniform_divisor(125) == 2.0
    assert uniform_divisor(65) == 2.0


def test_uniform_lookup_is_tagged():
    assert distribution_period(80).source is PeriodSource.EXACT
    assert distribution_period(130).source is PeriodSource.FALLBACK


def test_joint_table_exact_hit():
    period = distribution_period(75, has_spouse_beneficiary=True, spouse_age=62)

    assert period.period == 25.0
    assert period.table is LifeTable.JOINT
    assert period.source is PeriodSource.EXACT


def test_joint_table_miss_falls_back_to_smaller_divisor():
    period = distribution_period(78, has_spouse_beneficiary=True, spouse_age=60)

    # min(single life 27.1, uniform 22.0)
    assert period.period == 22.0
    assert period.table is LifeTable.JOINT
    assert period.source is PeriodSource.FALLBACK


def test_spouse_within_ten_years_uses_uniform():
    period = distribution_period(75, has_spouse_beneficiary=True, spouse_age=65)

    assert period.table is LifeTable.UNIFORM
    assert period.period == 24.6


def test_spouse_ignored_without_beneficiary_flag():
    assert distribution_period(75, has_spouse_beneficiary=False, spouse_age=50).table is LifeTable.UNIFORM


def test_spouse_beneficiary_profile():
    profile = make_rmd_profile(birth_year=1949, rmd_year=2024, has_spouse_beneficiary=True, spouse_birth_year=1962)
    results = calculate_rmd(profile, as_of_year=2024)

    assert results.owner_age == 75
    assert results.spouse_age == 62
    assert results.distribution_period == 25.0
    assert results.table_used is LifeTable.JOINT


def test_zero_period_gives_zero_amount():
    assert rmd_amount(100000, 0) == 0.0


def test_projection_takes_rmd_then_grows():
    rows = project_rmds(100000, 73, 2024, 3, annual_return_percent=5)

    assert [row.age for row in rows] == [73, 74, 75]
    assert [row.year for row in rows] == [2024, 2025, 2026]
    first = rows[0]
    assert first.rmd_amount == pytest.approx(100000 / 26.5)
    assert first.earnings == pytest.approx((100000 - first.rmd_amount) * 0.05)
    assert rows[1].beginning_balance == pytest.approx(first.ending_balance)
    assert rows[1].distribution_period == 25.5


def test_projection_stops_at_age_limit():
    rows = project_rmds(50000, 118, 2024, 10)

    assert [row.age for row in rows] == [118, 119]


def test_profile_projection_summary():
    profile = make_rmd_profile(years_to_project=5, estimated_return_rate=0)
    results = calculate_rmd(profile, as_of_year=2024)

    assert len(results.projections) == 5
    assert results.total_rmds == pytest.approx(sum(row.rmd_amount for row in results.projections))
    assert results.average_rmd == pytest.approx(results.total_rmds / 5)
    assert results.final_balance == pytest.approx(100000 - results.total_rmds)


def test_rmd_is_repeatable(rmd_profile):
    assert calculate_rmd(rmd_profile, as_of_year=2024) == calculate_rmd(rmd_profile, as_of_year=2024)
