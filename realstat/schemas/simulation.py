"""Data contracts for the investment simulation.

Monetary amounts are in 만원 (10,000 KRW); percentage fields are whole
percents (4.5 means 4.5%). Business ranges are not enforced here: range
problems come back as field warnings, not as parse errors. The only hard
limits are the magnitude caps below, which keep every result finite, and
non-finite numbers are rejected outright.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

InvestmentType = Literal["rent", "gap", "jeonse"]
PropertyType = Literal["apartment", "officetel", "commercial"]

MAX_AMOUNT = 1e12  # 만원, i.e. 10^16 KRW
MAX_PERCENT = 1000
MAX_YEARS = 100


def _amount(default: float, description: str):
    return Field(default, ge=-MAX_AMOUNT, le=MAX_AMOUNT, description=description)


def _percent(default: float, description: str):
    return Field(default, ge=-MAX_PERCENT, le=MAX_PERCENT, description=description)


def _years(default: int, description: str):
    return Field(default, ge=-MAX_YEARS, le=MAX_YEARS, description=description)


class SimulationInput(BaseModel):
    """Parameters of one real-estate investment scenario."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    investment_type: InvestmentType = Field(
        "rent", description="'jeonse' counts deposit interest only, no rent."
    )
    property_type: PropertyType = "apartment"
    purchase_price: float = _amount(100000, "Purchase price in 만원.")
    equity_ratio: float = _percent(30, "Share of the price paid in cash, percent.")
    loan_rate: float = _percent(4.5, "Annual loan rate, percent.")
    loan_term: int = _years(30, "Loan term in years.")
    monthly_rent: float = _amount(150, "Monthly rent in 만원.")
    deposit: float = _amount(10000, "Tenant deposit held, in 만원.")
    maintenance_cost: float = _amount(20, "Monthly maintenance in 만원.")
    property_tax: float = _percent(0.3, "Annual property tax, percent of price.")
    expected_appreciation: float = _percent(3, "Annual price growth, percent.")
    holding_period: int = _years(10, "Years held before sale.")
    vacancy_rate: float = _percent(5, "Share of the year without rent, percent.")


class YearlyProjection(BaseModel):
    """Single row of the holding-period projection."""

    model_config = ConfigDict(extra="forbid")

    year: int = Field(..., ge=0)
    property_value: float
    equity: float
    total_cashflow: float
    remaining_loan: float


class SimulationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    equity_amount: float
    loan_amount: float
    monthly_payment: float
    annual_net_income: float
    monthly_net_income: float
    cash_yield: float = Field(..., description="Annual net income / equity, percent.")
    yearly_data: List[YearlyProjection]
    final_value: float
    total_appreciation: float
    capital_gains_tax: float = Field(..., ge=0)
    total_profit: float
    total_roi: float
    annualized_roi: float


class SimulationResponse(BaseModel):
    result: SimulationResult
    warnings: Dict[str, str] = Field(default_factory=dict)


class ValidationResponse(BaseModel):
    warnings: Dict[str, str]
