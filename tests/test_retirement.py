from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.retirement import (
    future_value,
    future_value_of_annuity,
    inflate,
    monthly_contribution_needed,
    phase_for_age,
    present_value,
    project_retirement,
    project_year_by_year,
    required_savings,
    retirement_income,
)
from fincalc.schemas.retirement import Phase

from conftest import make_retirement_profile


def test_time_value_helpers():
    assert future_value(1000, 10, 2) == pytest.approx(1210)
    assert present_value(1210, 10, 2) == pytest.approx(1000)
    assert future_value_of_annuity(1000, 0, 5) == 5000
    assert future_value_of_annuity(100, 10, 2) == pytest.approx(210)
    assert inflate(100, 1, 3) == pytest.approx(103)


def test_required_savings_uses_four_percent_rule():
    assert required_savings(60000, 20000, 0) == pytest.approx(1_000_000)
    assert required_savings(30000, 20000, 15000) == 0


def test_monthly_contribution_is_zero_when_target_already_met():
    assert monthly_contribution_needed(100000, 200000, 10, 5, 0) == 0


def test_monthly_contribution_is_zero_with_no_time_left():
    assert monthly_contribution_needed(500000, 1000, 0, 5, 0) == 0


def test_monthly_contribution_zero_rate_with_match():
    # 120000 over 120 months, half of each dollar matched
    assert monthly_contribution_needed(120000, 0, 10, 0, 50) == pytest.approx(1000 / 1.5)


def test_retirement_income_adds_sources():
    income = retirement_income(1_000_000, 4, 20000, 5000)

    assert income.withdrawal_amount == pytest.approx(40000)
    assert income.total_annual_income == pytest.approx(65000)
    assert income.total_monthly_income == pytest.approx(65000 / 12)


def test_phase_switches_the_year_after_retirement_age():
    assert phase_for_age(65, 65) is Phase.ACCUMULATION
    assert phase_for_age(66, 65) is Phase.RETIREMENT

    rows = project_year_by_year(make_retirement_profile(), current_year=2024)
    by_age = {row.age: row for row in rows}

    assert by_age[65].phase is Phase.ACCUMULATION
    assert by_age[65].contribution == 10000
    assert by_age[66].phase is Phase.RETIREMENT
    assert by_age[66].contribution == 0
    assert by_age[66].withdrawal > 0


def test_projection_covers_each_year_to_life_expectancy():
    rows = project_year_by_year(make_retirement_profile(), current_year=2024)

    assert len(rows) == 60
    assert rows[0].age == 31
    assert rows[0].year == 2025
    assert rows[-1].age == 90


def test_zero_return_projection_by_hand():
    profile = make_retirement_profile(
        current_age=30,
        retirement_age=32,
        life_expectancy=33,
        current_savings=1000,
        annual_contribution=5000,
        employer_match_percentage=50,
        pre_retirement_return_percent=0,
        post_retirement_return_percent=0,
        inflation_rate_percent=0,
        desired_annual_income=2000,
        social_security_income=0,
    )
    rows = project_year_by_year(profile, current_year=2024)

    assert [row.balance for row in rows] == [8500.0, 16000.0, 14000.0]
    assert rows[2].withdrawal == 2000
    assert rows[2].surplus == 0


def test_balance_floors_at_zero_once_exhausted():
    profile = make_retirement_profile(
        current_age=70,
        retirement_age=65,
        life_expectancy=95,
        current_savings=50000,
        desired_annual_income=80000,
        social_security_income=10000,
    )
    rows = project_year_by_year(profile, current_year=2024)

    assert all(row.balance >= 0 for row in rows)
    assert rows[-1].balance == 0


def test_shortfall_when_desired_income_is_out_of_reach():
    profile = make_retirement_profile(
        current_age=40,
        current_savings=10000,
        annual_contribution=5000,
        employer_match_percentage=0,
        desired_annual_income=150000,
        social_security_income=0,
    )
    results = project_retirement(profile, current_year=2024)

    assert results.can_retire_comfortably is False
    assert results.shortfall > 0
    assert isclose(
        results.shortfall, results.required_savings_at_retirement - results.total_at_retirement, rel_tol=1e-12
    )
    assert results.monthly_contribution_needed > 0


def test_comfortable_retirement_has_no_shortfall():
    profile = make_retirement_profile(
        desired_annual_income=20000, social_security_income=20000, inflation_rate_percent=0
    )
    results = project_retirement(profile, current_year=2024)

    assert results.required_savings_at_retirement == 0
    assert results.can_retire_comfortably is True
    assert results.shortfall == 0
    assert results.monthly_contribution_needed == 0


def test_aggregate_totals():
    profile = make_retirement_profile()
    results = project_retirement(profile, current_year=2024)

    assert results.years_to_retirement == 35
    assert results.years_in_retirement == 25
    assert results.total_annual_contribution == pytest.approx(15000)
    assert results.total_at_retirement == pytest.approx(
        future_value(50000, 7, 35) + future_value_of_annuity(15000, 7, 35)
    )
    assert results.real_pre_retirement_return == pytest.approx(4)
    assert results.withdrawal_rate == 4.0
    assert results.annual_contribution_needed == pytest.approx(results.monthly_contribution_needed * 12)


def test_already_retired_profile():
    profile = make_retirement_profile(current_age=70, retirement_age=65, current_savings=400000)
    results = project_retirement(profile, current_year=2024)

    assert results.is_retired
    assert results.years_to_retirement == 0
    assert results.total_at_retirement == 400000
    assert all(row.phase is Phase.RETIREMENT for row in results.year_by_year_projection)


def test_projection_is_repeatable():
    profile = make_retirement_profile()

    assert project_retirement(profile, current_year=2024) == project_retirement(profile, current_year=2024)


def test_year_rows_are_whole_dollars():
    rows = project_year_by_year(make_retirement_profile(), current_year=2024)

    for row in rows:
        assert row.balance == int(row.balance)
        assert row.investment_return == int(row.investment_return)
