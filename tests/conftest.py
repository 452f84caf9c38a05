from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from fincalc.app import create_app
from fincalc.schemas.retirement import RetirementProfile
from fincalc.schemas.rmd import RMDProfile


@pytest.fixture()
def app():
    flask_app = create_app()
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


def make_retirement_profile(**overrides) -> RetirementProfile:
    profile = {
        "current_age": 30,
        "retirement_age": 65,
        "life_expectancy": 90,
        "current_savings": 50000,
        "annual_contribution": 10000,
        "employer_match_percentage": 50,
        "current_income": 80000,
        "pre_retirement_return_percent": 7,
        "post_retirement_return_percent": 5,
        "inflation_rate_percent": 3,
        "desired_annual_income": 60000,
        "social_security_income": 20000,
        "other_income": 0,
    }
    profile.update(overrides)
    return RetirementProfile(**profile)


def make_rmd_profile(**overrides) -> RMDProfile:
    profile = {"birth_year": 1951, "rmd_year": 2024, "account_balance": 100000}
    profile.update(overrides)
    return RMDProfile(**profile)


@pytest.fixture()
def retirement_profile() -> RetirementProfile:
    return make_retirement_profile()


@pytest.fixture()
def rmd_profile() -> RMDProfile:
    return make_rmd_profile()
