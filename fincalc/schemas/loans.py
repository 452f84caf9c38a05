"""Data contracts for amortization and loan cost calculations."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

OriginationFeeType = Literal["percentage", "amount"]


class LoanTerms(BaseModel):
    """Principal, nominal annual rate and term of a fixed-payment loan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(..., description="Amount financed.")
    annual_rate_percent: float = Field(..., description="Nominal annual rate, e.g. 6.5 for 6.5%.")
    term_months: int = Field(..., description="Number of monthly payments.")

    @classmethod
    def from_years(cls, principal: float, annual_rate_percent: float, term_years: int) -> "LoanTerms":
        return cls(
            principal=principal,
            annual_rate_percent=annual_rate_percent,
            term_months=term_years * 12,
        )


class AmortizationRow(BaseModel):
    """Single month of an amortization schedule."""

    month: int = Field(..., ge=1)
    payment: float
    principal_portion: float
    interest_portion: float
    ending_balance: float = Field(..., ge=0)
    cumulative_principal: float
    cumulative_interest: float


class AmortizationSchedule(BaseModel):
    payment: float
    number_of_payments: int
    total_payments: float
    total_interest: float
    schedule: List[AmortizationRow]


class AnnualSummaryRow(BaseModel):
    """Twelve (or fewer, for the final year) schedule rows rolled up."""

    year: int = Field(..., ge=1)
    total_payment: float
    total_principal: float
    total_interest: float
    ending_balance: float


class FeeSet(BaseModel):
    """
    Closing costs charged on top of the loan.

    The origination fee is read through ``origination_fee_type``: a percentage
    of principal (the default) or a flat dollar amount, never both.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    origination_fee: float = 0.0
    origination_fee_type: OriginationFeeType = "percentage"
    documentation_fee: float = 0.0
    other_fees: float = 0.0

    def origination_fee_amount(self, principal: float) -> float:
        if self.origination_fee_type == "percentage":
            return principal * self.origination_fee / 100
        return self.origination_fee

    def total(self, principal: float) -> float:
        return self.origination_fee_amount(principal) + self.documentation_fee + self.other_fees


class LoanCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float
    annual_rate_percent: float
    term_years: int
    fees: FeeSet = Field(default_factory=FeeSet)


class LoanCostResult(BaseModel):
    """
    Aggregate cost of a loan with closing fees.

    ``approximate_apr`` is (interest + fees) / principal / years * 100. It is a
    linear cost-of-borrowing figure, not a Regulation Z APR.
    """

    loan_amount: float
    monthly_payment: float
    total_payments: float
    total_interest: float
    origination_fee_amount: float
    total_fees: float
    total_cost: float
    approximate_apr: float
    effective_interest_rate: float


class PersonalLoanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    loan_amount: float
    annual_rate_percent: float
    term_months: int


class PersonalLoanResult(BaseModel):
    loan_amount: float
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: List[AmortizationRow]


class AutoLoanInputs(BaseModel):
    """Vehicle purchase inputs; sales tax is a percentage of the post-trade-in price."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    auto_price: float
    down_payment: float = 0.0
    annual_rate_percent: float
    term_months: int
    trade_in_value: float = 0.0
    sales_tax_percent: float = 0.0
    other_fees: float = 0.0
    include_tax_fees_in_loan: bool = False


class AutoLoanResult(BaseModel):
    price_after_trade_in: float
    tax_amount: float
    total_loan_amount: float
    upfront_payment: float
    monthly_payment: float
    total_payments: float
    total_interest: float
    total_cost: float
    schedule: List[AmortizationRow]
