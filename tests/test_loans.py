from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.loans import (
    approximate_apr,
    calculate_auto_loan,
    calculate_loan_cost,
    calculate_personal_loan,
)
from fincalc.domain.errors import InvalidInputError
from fincalc.schemas.loans import AutoLoanInputs, FeeSet


def test_percentage_origination_fee_totals():
    fees = FeeSet(origination_fee=2, documentation_fee=500, other_fees=250)
    result = calculate_loan_cost(100000, 8.0, 10, fees)

    assert result.origination_fee_amount == pytest.approx(2000)
    assert result.total_fees == pytest.approx(2000 + 500 + 250)
    assert result.total_fees == pytest.approx(fees.total(100000))


def test_flat_origination_fee_totals():
    fees = FeeSet(origination_fee=1500, origination_fee_type="amount", documentation_fee=500, other_fees=250)
    result = calculate_loan_cost(100000, 8.0, 10, fees)

    assert result.origination_fee_amount == 1500
    assert result.total_fees == pytest.approx(1500 + 500 + 250)


def test_total_cost_is_principal_interest_and_fees():
    fees = FeeSet(origination_fee=1, documentation_fee=300)
    result = calculate_loan_cost(50000, 6.0, 5, fees)

    assert result.total_cost == pytest.approx(50000 + result.total_interest + result.total_fees)
    assert result.effective_interest_rate == pytest.approx(result.total_interest / 50000 * 100)
    assert result.approximate_apr == pytest.approx(
        (result.total_interest + result.total_fees) / 50000 / 5 * 100
    )


def test_no_fees_by_default():
    result = calculate_loan_cost(10000, 0.0, 1)

    assert result.total_fees == 0
    assert result.total_interest == 0
    assert result.total_cost == pytest.approx(10000)


def test_apr_rises_with_origination_fee():
    aprs = [
        calculate_loan_cost(250000, 7.5, 10, FeeSet(origination_fee=pct)).approximate_apr
        for pct in (0, 0.5, 1, 2, 5)
    ]

    assert all(later > earlier for earlier, later in zip(aprs, aprs[1:]))


def test_apr_degenerate_inputs():
    assert approximate_apr(0, 100, 10, 5) == 0.0
    assert approximate_apr(1000, 100, 10, 0) == 0.0


@pytest.mark.parametrize("field", ["origination_fee", "documentation_fee", "other_fees"])
def test_negative_fee_rejected(field):
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_loan_cost(10000, 5.0, 3, FeeSet(**{field: -1}))

    assert exc_info.value.field == field


def test_loan_cost_rejects_bad_terms():
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_loan_cost(10000, 5.0, 0)
    assert exc_info.value.field == "term_years"

    with pytest.raises(InvalidInputError) as exc_info:
        calculate_loan_cost(0, 5.0, 3)
    assert exc_info.value.field == "principal"


def test_auto_loan_with_trade_in():
    inputs = AutoLoanInputs(
        auto_price=50000,
        trade_in_value=10000,
        annual_rate_percent=5,
        term_months=60,
        sales_tax_percent=7,
        other_fees=500,
    )
    result = calculate_auto_loan(inputs)

    assert result.price_after_trade_in == 40000
    assert result.total_loan_amount == 40000
    assert result.monthly_payment == pytest.approx(754.85, abs=0.01)
    assert result.tax_amount == pytest.approx(2800)
    assert result.upfront_payment == pytest.approx(2800 + 500)
    assert result.total_cost == pytest.approx(result.total_payments)


def test_auto_loan_rolls_tax_and_fees_into_principal():
    inputs = AutoLoanInputs(
        auto_price=30000,
        down_payment=5000,
        annual_rate_percent=6,
        term_months=48,
        sales_tax_percent=8,
        other_fees=400,
        include_tax_fees_in_loan=True,
    )
    result = calculate_auto_loan(inputs)

    assert result.total_loan_amount == pytest.approx(30000 + 2400 + 400 - 5000)
    assert result.upfront_payment == 5000
    assert result.total_cost == pytest.approx(result.total_payments + 5000)
    assert isclose(result.total_interest, result.total_payments - result.total_loan_amount, abs_tol=1e-6)


def test_auto_loan_rejects_negative_trade_in():
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_auto_loan(AutoLoanInputs(auto_price=20000, trade_in_value=-1, annual_rate_percent=5, term_months=36))

    assert exc_info.value.field == "trade_in_value"


def test_auto_loan_down_payment_covering_price_is_rejected():
    inputs = AutoLoanInputs(auto_price=20000, down_payment=20000, annual_rate_percent=5, term_months=36)

    with pytest.raises(InvalidInputError) as exc_info:
        calculate_auto_loan(inputs)

    assert exc_info.value.field == "principal"


def test_personal_loan():
    result = calculate_personal_loan(15000, 0.0, 36)

    assert result.monthly_payment == pytest.approx(15000 / 36)
    assert result.total_payment == pytest.approx(15000)
    assert result.total_interest == pytest.approx(0.0)
    assert len(result.schedule) == 36


def test_loan_cost_is_repeatable():
    fees = FeeSet(origination_fee=1.5, documentation_fee=250)

    assert calculate_loan_cost(80000, 9.0, 7, fees) == calculate_loan_cost(80000, 9.0, 7, fees)


def test_rate_that_only_warns_still_fails_cleanly():
    # 25000% passes business-loan validation with a warning but cannot be compounded over 30 years
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_loan_cost(100000, 25000, 30)

    assert exc_info.value.field == "annual_rate_percent"
