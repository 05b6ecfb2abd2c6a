"""Data contracts for the acquisition and transfer tax calculators.

Request and result amounts are in 만원; rates are whole percents.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaxedPropertyType = Literal["apartment", "house", "land"]


class AcquisitionTaxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    price: float = Field(90000, ge=0, le=1e12, description="Purchase price in 만원.")
    is_adjusted_area: bool = Field(True, description="Inside a regulated (조정대상) area.")
    house_count: int = Field(1, ge=1, description="Homes owned after this purchase.")
    is_first_time: bool = Field(False, description="First home purchase relief.")
    property_type: TaxedPropertyType = "apartment"


class AcquisitionTax(BaseModel):
    rate: float = Field(..., description="Acquisition tax rate, percent.")
    acquisition_tax: float
    local_education_tax: float
    agricultural_tax: float
    total_tax: float
    effective_rate: float = Field(..., description="Total tax / price, percent.")


class TransferTaxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    purchase_price: float = Field(60000, ge=0, le=1e12)
    sale_price: float = Field(90000, ge=0, le=1e12)
    holding_years: float = Field(5, ge=0, le=100)
    living_years: float = Field(3, ge=0, le=100)
    is_adjusted_area: bool = True
    house_count: int = Field(1, ge=1)
    acquisition_cost: float = Field(500, ge=0, le=1e12, description="Costs paid on purchase, 만원.")
    transfer_cost: float = Field(300, ge=0, le=1e12, description="Costs paid on sale, 만원.")


class TransferTax(BaseModel):
    """Transfer (capital gains) tax on one sale; a loss owes nothing."""

    gain: float
    deduction_rate: float = Field(..., ge=0, description="Long-term holding deduction, percent.")
    taxable_gain: float
    tax_rate: float = Field(..., description="Marginal or flat rate applied, percent.")
    tax: float
    local_tax: float
    total_tax: float
    net_profit: float


class HoldingTaxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    assessed_value: float = Field(..., ge=0, le=1e12, description="Property tax base in 만원.")
    comprehensive_base: float = Field(0, ge=0, le=1e12, description="Comprehensive tax base in 만원.")


class HoldingTax(BaseModel):
    property_tax: float
    comprehensive_tax: float
    total_tax: float
