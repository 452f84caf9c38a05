"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from fincalc.core.amortization import amortize_terms
from fincalc.core.equity import calculate_home_equity_loan
from fincalc.core.loans import calculate_auto_loan, calculate_loan_cost, calculate_personal_loan
from fincalc.core.rent import calculate_rent
from fincalc.core.rent_vs_buy import calculate_rent_vs_buy
from fincalc.core.retirement import project_retirement
from fincalc.core.rmd import calculate_rmd
from fincalc.domain.errors import InvalidInputError, ValidationReport
from fincalc.domain.loans import validate_business_loan, validate_home_equity_loan
from fincalc.domain.retirement import validate_retirement_profile
from fincalc.domain.rmd import validate_rmd_profile
from fincalc.schemas.equity import HomeEquityRequest
from fincalc.schemas.loans import AutoLoanInputs, LoanCostRequest, LoanTerms, PersonalLoanRequest
from fincalc.schemas.rent import RentInputs, RentVsBuyInputs
from fincalc.schemas.retirement import RetirementProfile
from fincalc.schemas.rmd import RMDProfile

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidInputError)
def _handle_invalid_input(exc: InvalidInputError):
    logger.info("rejected %s: %s", exc.field, exc.message)
    return jsonify({"detail": exc.message, "field": exc.field}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _rejected(report: ValidationReport):
    logger.info("rejected %s: %s", request.path, "; ".join(report.errors))
    return jsonify({"error": report.errors, "warnings": report.warnings}), HTTPStatus.BAD_REQUEST


def _with_warnings(result: Any, report: ValidationReport) -> Any:
    body = result.model_dump(mode="json")
    body["warnings"] = report.warnings
    return jsonify(body)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.post("/loans/amortization")
def amortization() -> Any:
    terms = LoanTerms.model_validate(_payload())
    return jsonify(amortize_terms(terms).model_dump(mode="json"))


@api_bp.post("/loans/cost")
def loan_cost() -> Any:
    """Business-style term loan with closing fees."""
    payload = LoanCostRequest.model_validate(_payload())
    report = validate_business_loan(
        payload.principal, payload.annual_rate_percent, payload.term_years, payload.fees
    )
    if not report.ok:
        return _rejected(report)

    result = calculate_loan_cost(
        payload.principal, payload.annual_rate_percent, payload.term_years, payload.fees
    )
    return _with_warnings(result, report)


@api_bp.post("/loans/personal")
def personal_loan() -> Any:
    payload = PersonalLoanRequest.model_validate(_payload())
    result = calculate_personal_loan(payload.loan_amount, payload.annual_rate_percent, payload.term_months)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/loans/auto")
def auto_loan() -> Any:
    inputs = AutoLoanInputs.model_validate(_payload())
    return jsonify(calculate_auto_loan(inputs).model_dump(mode="json"))


@api_bp.post("/home-equity")
def home_equity() -> Any:
    payload = HomeEquityRequest.model_validate(_payload())
    report = validate_home_equity_loan(payload.loan_amount, payload.annual_rate_percent, payload.term_years)
    if not report.ok:
        return _rejected(report)

    result = calculate_home_equity_loan(
        payload.home_value,
        payload.mortgage_balance,
        payload.loan_amount,
        payload.annual_rate_percent,
        payload.term_years,
        payload.max_ltv_percent,
    )
    return _with_warnings(result, report)


@api_bp.post("/retirement")
def retirement() -> Any:
    profile = RetirementProfile.model_validate(_payload())
    report = validate_retirement_profile(profile)
    if not report.ok:
        return _rejected(report)
    return _with_warnings(project_retirement(profile), report)


@api_bp.post("/rmd")
def rmd() -> Any:
    profile = RMDProfile.model_validate(_payload())
    report = validate_rmd_profile(profile)
    if not report.ok:
        return _rejected(report)
    return _with_warnings(calculate_rmd(profile), report)


@api_bp.post("/rent")
def rent() -> Any:
    inputs = RentInputs.model_validate(_payload())
    return jsonify(calculate_rent(inputs).model_dump(mode="json"))


@api_bp.post("/rent-vs-buy")
def rent_vs_buy() -> Any:
    inputs = RentVsBuyInputs.model_validate(_payload())
    return jsonify(calculate_rent_vs_buy(inputs).model_dump(mode="json"))
