"""Data contracts for mortgage calculations.

Request amounts are in 만원; schedule and interest outputs are in 원.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

RepaymentType = Literal["equal_installment", "equal_principal"]


class RepaymentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    loan_amount: float = Field(..., ge=0, description="Principal in 만원.")
    interest_rate: float = Field(..., ge=0, le=30, description="Annual rate, percent.")
    loan_term: int = Field(..., ge=1, le=50, description="Term in years.")
    repayment_type: RepaymentType = "equal_installment"


class RepaymentRow(BaseModel):
    month: int = Field(..., ge=1)
    year: int = Field(..., ge=1)
    monthly_payment: float
    principal_payment: float
    interest_payment: float
    remaining_principal: float = Field(..., ge=0)
    total_interest: float


class RepaymentSchedule(BaseModel):
    """Months 1-12 and every 12th month after that."""

    schedule: List[RepaymentRow]
    total_interest: float
    total_payment: float


class RegulationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    property_price: float = Field(..., ge=0)
    annual_income: float = Field(..., ge=0)
    existing_loan_payment: float = Field(0.0, ge=0, description="Existing monthly payments in 만원.")
    loan_amount: float = Field(..., ge=0)
    loan_term: int = Field(..., ge=1, le=50)
    interest_rate: float = Field(..., ge=0, le=30)


class LendingRatios(BaseModel):
    dsr: float = Field(..., description="Debt service ratio, percent.")
    ltv: float = Field(..., description="Loan to value, percent.")
    dti: float = Field(..., description="Debt to income, percent.")
    monthly_payment: float
    max_loan_by_dsr: int
    max_loan_by_ltv: int
    loanable_max: int


class JeonseLoanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    deposit: float = Field(..., ge=0, description="Jeonse deposit in 만원.")
    rate: float = Field(..., ge=0, le=30)


class JeonseLoan(BaseModel):
    max_loan: int = Field(..., description="In 만원.")
    monthly_interest: float = Field(..., description="In 원.")
