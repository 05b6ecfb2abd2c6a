"""Data contracts for generated market series."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SeriesPoint(BaseModel):
    """One period of a generated series; frozen once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1900)


class HousingIndexPoint(SeriesPoint):
    """Monthly price and housing indices, base period 2000-01 = 100."""

    date: str
    year_month: int = Field(..., description="year * 100 + month, e.g. 202601.")
    month: int = Field(..., ge=1, le=12)
    cpi: float = Field(..., gt=0)
    hpi_nation: float = Field(..., gt=0)
    hpi_seoul: float = Field(..., gt=0)
    hpi_gyeonggi: float = Field(..., gt=0)
    hpi_local: float = Field(..., gt=0)
    jeonse_nation: float = Field(..., gt=0)
    jeonse_seoul: float = Field(..., gt=0)


class InterestRatePoint(SeriesPoint):
    """Quarterly base rate in percent."""

    date: str
    quarter: int = Field(..., ge=1, le=4)
    rate: float = Field(..., ge=0)


class GdpPoint(SeriesPoint):
    rate: float = Field(..., description="Real GDP growth in percent.")


class MoneySupplyPoint(SeriesPoint):
    amount: float = Field(..., gt=0, description="M2 in trillion KRW.")
    growth_rate: float = Field(..., description="Trend growth in percent.")


class RegionalSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    base_index: float = Field(..., gt=0)
    current_index: float = Field(..., gt=0)
    change_rate: float
    transaction_volume: int = Field(..., ge=0)
    avg_price: int = Field(..., ge=0, description="Average price in 만원.")


class TransactionPoint(SeriesPoint):
    date: str
    month: int = Field(..., ge=1, le=12)
    volume: int = Field(..., ge=0)


class RegionChange(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    seoul: float
    nation: float


class MarketIndicators(BaseModel):
    """Headline numbers for the most recent period of the window."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date: str
    hpi_seoul: float
    hpi_nation: float
    hpi_gyeonggi: float
    jeonse_seoul: float
    jeonse_nation: float
    cpi: float
    interest_rate: float
    month_over_month: RegionChange
    year_over_year: RegionChange


class SeriesListResponse(BaseModel):
    series: List[str]
