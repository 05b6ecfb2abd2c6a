"""Synthetic market series for the dashboard.

Each series walks a running index forward one period at a time, multiplying
it by ``1 + bias + noise`` where the bias comes from a piecewise rate table
and the noise is drawn from a small symmetric band. Results are memoized per
series name on the generator instance; ``clear_cache()`` forces a rebuild
with fresh noise on the next access.
"""

from __future__ import annotations

import random
import threading
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from realstat.core.logging import logger
from realstat.core.periods import (
    RateBand,
    YearMonth,
    iter_months,
    iter_quarters,
    lookup,
    month_label,
    months,
    quarter_label,
    quarter_month,
    years,
)
from realstat.schemas.series import (
    GdpPoint,
    HousingIndexPoint,
    InterestRatePoint,
    MarketIndicators,
    MoneySupplyPoint,
    RegionalSnapshot,
    RegionChange,
    TransactionPoint,
)

HISTORY_START: YearMonth = (2000, 1)
HISTORY_END: YearMonth = (2026, 1)
TRANSACTION_START: YearMonth = (2015, 1)
TRANSACTION_END: YearMonth = (2025, 12)

BASE_INDEX = 100.0
M2_BASE = 600.0  # trillion KRW, 2000


class Momentum(NamedTuple):
    seoul: float
    nation: float
    gyeonggi: float
    local: float


class JeonseRatio(NamedTuple):
    seoul: float
    nation: float


# Monthly CPI drift; narrower bands first
CPI_RATES: Sequence[RateBand[float]] = (
    months((2022, 6), (2022, 12), 0.006),
    years(2021, 2023, 0.0045),
    years(2024, 2024, 0.0028),
    years(2025, 2025, 0.0018),
    years(2026, 2026, 0.0017),
)
CPI_DEFAULT = 0.002
CPI_NOISE = 0.0005

HPI_MOMENTUM: Sequence[RateBand[Momentum]] = (
    years(2000, 2002, Momentum(0.008, 0.005, 0.007, 0.003)),
    years(2003, 2007, Momentum(0.006, 0.003, 0.005, 0.002)),
    years(2008, 2013, Momentum(-0.002, 0.002, 0.001, 0.003)),
    years(2014, 2016, Momentum(0.004, 0.003, 0.004, 0.002)),
    years(2017, 2019, Momentum(0.008, 0.002, 0.006, 0.001)),
    years(2020, 2021, Momentum(0.015, 0.012, 0.014, 0.010)),
    years(2022, 2022, Momentum(-0.010, -0.008, -0.009, -0.006)),
    months((2023, 1), (2023, 6), Momentum(-0.003, -0.002, -0.003, -0.001)),
    months((2023, 7), (2023, 12), Momentum(0.001, 0.0005, 0.001, 0.0003)),
    years(2024, 2024, Momentum(0.003, 0.002, 0.0025, 0.001)),
    years(2025, 2025, Momentum(0.007, 0.003, 0.0045, 0.001)),
    years(2026, 2026, Momentum(0.004, 0.002, 0.003, 0.0005)),
)
HPI_DEFAULT = Momentum(0.0, 0.0, 0.0, 0.0)
HPI_NOISE = 0.001

# Jeonse follows sale momentum scaled by these ratios
JEONSE_RATIOS: Sequence[RateBand[JeonseRatio]] = (
    years(2025, 2026, JeonseRatio(1.2, 1.1)),
)
JEONSE_DEFAULT = JeonseRatio(0.8, 0.85)
JEONSE_NOISE = 0.0005

BASE_RATES: Dict[int, float] = {
    2000: 5.25, 2001: 4.00, 2002: 4.25, 2003: 3.75, 2004: 3.25,
    2005: 3.25, 2006: 4.50, 2007: 5.00, 2008: 3.00, 2009: 2.00,
    2010: 2.50, 2011: 3.25, 2012: 2.75, 2013: 2.50, 2014: 2.00,
    2015: 1.50, 2016: 1.25, 2017: 1.50, 2018: 1.75, 2019: 1.25,
    2020: 0.50, 2021: 1.00, 2022: 3.25, 2023: 3.50, 2024: 3.00,
    2025: 2.50, 2026: 2.50,
}
BASE_RATE_OVERRIDES: Sequence[RateBand[float]] = (
    months((2024, 1), (2024, 6), 3.50),
    months((2024, 7), (2024, 9), 3.25),
    months((2024, 10), (2024, 12), 3.00),
    months((2025, 1), (2025, 3), 3.00),
    months((2025, 4), (2025, 12), 2.50),
)
BASE_RATE_DEFAULT = 2.50

GDP_RATES: Dict[int, float] = {
    2000: 8.9, 2001: 4.5, 2002: 7.4, 2003: 2.9, 2004: 5.2,
    2005: 4.3, 2006: 5.3, 2007: 5.8, 2008: 2.9, 2009: 0.8,
    2010: 6.8, 2011: 3.7, 2012: 2.4, 2013: 3.2, 2014: 3.2,
    2015: 2.8, 2016: 2.9, 2017: 3.2, 2018: 2.9, 2019: 2.2,
    2020: -0.7, 2021: 4.3, 2022: 2.6, 2023: 1.4, 2024: 1.0,
    2025: 0.9, 2026: 1.8,
}
GDP_DEFAULT = 0.0

M2_GROWTH: Sequence[RateBand[float]] = (
    years(2020, 2021, 0.12),
    years(2022, 2022, 0.05),
    years(2023, 2023, 0.04),
    years(2024, 2024, 0.045),
    years(2025, 2025, 0.087),
    years(2026, 2026, 0.06),
)
M2_DEFAULT = 0.08
M2_NOISE = 0.01

# (id, name, base index); snapshot as of 2025-12
REGIONS: Sequence[Tuple[str, str, float]] = (
    ("seoul", "서울", 215.3),
    ("gyeonggi", "경기", 182.7),
    ("incheon", "인천", 168.4),
    ("busan", "부산", 152.1),
    ("daegu", "대구", 138.6),
    ("daejeon", "대전", 141.2),
    ("gwangju", "광주", 128.5),
    ("ulsan", "울산", 131.8),
    ("sejong", "세종", 175.6),
    ("gangwon", "강원", 118.3),
    ("chungbuk", "충북", 122.4),
    ("chungnam", "충남", 125.8),
    ("jeonbuk", "전북", 108.2),
    ("jeonnam", "전남", 104.6),
    ("gyeongbuk", "경북", 112.3),
    ("gyeongnam", "경남", 127.5),
    ("jeju", "제주", 148.9),
)
REGION_BIAS: Dict[str, float] = {
    "seoul": 1.5,
    "gyeonggi": 1.5,
    "incheon": 1.5,
    "sejong": 0.5,
    "daejeon": 0.5,
}
REGION_BIAS_DEFAULT = -0.5

TRANSACTION_BASE = 75000
SEASONALITY: Dict[int, float] = {
    1: 0.7, 2: 0.7,
    3: 1.2, 4: 1.2, 5: 1.2,
    9: 1.15, 10: 1.15, 11: 1.15,
    12: 0.85,
}
TRANSACTION_CYCLE: Sequence[RateBand[float]] = (
    years(2020, 2021, 1.4),
    years(2022, 2023, 0.55),
    years(2024, 2024, 0.7),
    years(2025, 2025, 0.8),
)
TRANSACTION_NOISE = 0.15


class UnknownSeriesError(KeyError):
    """Raised when a series name has no registered builder."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name
        self.message = f"unknown series '{name}'"

    def __str__(self) -> str:
        return self.message


class SeriesGenerator:
    """Builds and memoizes the synthetic series.

    ``rng`` only needs ``uniform(a, b)``; pass a seeded ``random.Random`` for
    reproducible output. ``end`` is the last monthly period of the history
    window; quarterly and yearly series stop in the same quarter and year.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        end: YearMonth = HISTORY_END,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self.start = HISTORY_START
        self.end = end
        self._cache: Dict[str, object] = {}
        self._lock = threading.RLock()
        self._builders: Dict[str, Callable[[], object]] = {
            "historical": self._build_historical,
            "interest_rate": self._build_interest_rate,
            "gdp": self._build_gdp,
            "m2": self._build_m2,
            "regional": self._build_regional,
            "transaction": self._build_transaction,
            "latest_indicators": self._build_latest_indicators,
        }

    @property
    def names(self) -> List[str]:
        return list(self._builders)

    def cached(self) -> List[str]:
        with self._lock:
            return list(self._cache)

    def get(self, name: str):
        """Return the memoized series, building it on first access."""
        builder = self._builders.get(name)
        if builder is None:
            raise UnknownSeriesError(name)
        with self._lock:
            if name not in self._cache:
                data = builder()
                self._cache[name] = data
                size = len(data) if isinstance(data, tuple) else 1
                logger.info("Generated %s series (%d points)", name, size)
            return self._cache[name]

    def clear_cache(self) -> None:
        with self._lock:
            dropped = len(self._cache)
            self._cache.clear()
        logger.info("Cleared %d cached series", dropped)

    def historical(self) -> Tuple[HousingIndexPoint, ...]:
        return self.get("historical")

    def interest_rate(self) -> Tuple[InterestRatePoint, ...]:
        return self.get("interest_rate")

    def gdp(self) -> Tuple[GdpPoint, ...]:
        return self.get("gdp")

    def m2(self) -> Tuple[MoneySupplyPoint, ...]:
        return self.get("m2")

    def regional(self) -> Tuple[RegionalSnapshot, ...]:
        return self.get("regional")

    def transaction(self) -> Tuple[TransactionPoint, ...]:
        return self.get("transaction")

    def latest_indicators(self) -> MarketIndicators:
        return self.get("latest_indicators")

    def _noise(self, band: float) -> float:
        return self._rng.uniform(-band, band)

    def _build_historical(self) -> Tuple[HousingIndexPoint, ...]:
        cpi = BASE_INDEX
        hpi = dict.fromkeys(Momentum._fields, BASE_INDEX)
        jeonse_seoul = jeonse_nation = BASE_INDEX

        points: List[HousingIndexPoint] = []
        for year, month in iter_months(self.start, self.end):
            cpi *= 1 + lookup(CPI_RATES, year, month, default=CPI_DEFAULT) + self._noise(CPI_NOISE)

            momentum = lookup(HPI_MOMENTUM, year, month, default=HPI_DEFAULT)
            for region in Momentum._fields:
                hpi[region] *= 1 + getattr(momentum, region) + self._noise(HPI_NOISE)

            ratio = lookup(JEONSE_RATIOS, year, month, default=JEONSE_DEFAULT)
            jeonse_seoul *= 1 + momentum.seoul * ratio.seoul + self._noise(JEONSE_NOISE)
            jeonse_nation *= 1 + momentum.nation * ratio.nation + self._noise(JEONSE_NOISE)

            points.append(
                HousingIndexPoint(
                    date=month_label(year, month),
                    year_month=year * 100 + month,
                    year=year,
                    month=month,
                    cpi=round(cpi, 1),
                    hpi_nation=round(hpi["nation"], 1),
                    hpi_seoul=round(hpi["seoul"], 1),
                    hpi_gyeonggi=round(hpi["gyeonggi"], 1),
                    hpi_local=round(hpi["local"], 1),
                    jeonse_nation=round(jeonse_nation, 1),
                    jeonse_seoul=round(jeonse_seoul, 1),
                )
            )
        return tuple(points)

    def _build_interest_rate(self) -> Tuple[InterestRatePoint, ...]:
        first = (self.start[0], (self.start[1] - 1) // 3 + 1)
        last = (self.end[0], (self.end[1] - 1) // 3 + 1)

        points: List[InterestRatePoint] = []
        for year, quarter in iter_quarters(first, last):
            yearly = BASE_RATES.get(year, BASE_RATE_DEFAULT)
            rate = lookup(BASE_RATE_OVERRIDES, year, quarter_month(quarter), default=yearly)
            points.append(
                InterestRatePoint(
                    date=quarter_label(year, quarter),
                    year=year,
                    quarter=quarter,
                    rate=round(rate, 2),
                )
            )
        return tuple(points)

    def _build_gdp(self) -> Tuple[GdpPoint, ...]:
        return tuple(
            GdpPoint(year=year, rate=GDP_RATES.get(year, GDP_DEFAULT))
            for year in range(self.start[0], self.end[0] + 1)
        )

    def _build_m2(self) -> Tuple[MoneySupplyPoint, ...]:
        amount = M2_BASE
        points: List[MoneySupplyPoint] = []
        for year in range(self.start[0], self.end[0] + 1):
            growth = lookup(M2_GROWTH, year, default=M2_DEFAULT)
            amount *= 1 + growth + self._noise(M2_NOISE)
            points.append(
                MoneySupplyPoint(
                    year=year,
                    amount=float(round(amount)),
                    growth_rate=round(growth * 100, 1),
                )
            )
        return tuple(points)

    def _build_regional(self) -> Tuple[RegionalSnapshot, ...]:
        snapshots: List[RegionalSnapshot] = []
        for region_id, name, base_index in REGIONS:
            bias = REGION_BIAS.get(region_id, REGION_BIAS_DEFAULT)
            snapshots.append(
                RegionalSnapshot(
                    id=region_id,
                    name=name,
                    base_index=base_index,
                    current_index=base_index,
                    change_rate=round(self._rng.uniform(0, 3) + bias - 1, 2),
                    transaction_volume=int(self._rng.uniform(0, 30000) + 8000),
                    avg_price=int(base_index * 52 + self._rng.uniform(0, 8000)),
                )
            )
        return tuple(snapshots)

    def _build_transaction(self) -> Tuple[TransactionPoint, ...]:
        last = min(TRANSACTION_END, self.end)
        points: List[TransactionPoint] = []
        for year, month in iter_months(TRANSACTION_START, last):
            base = TRANSACTION_BASE * SEASONALITY.get(month, 1.0)
            base *= lookup(TRANSACTION_CYCLE, year, month, default=1.0)
            volume = int(base * (1 + self._noise(TRANSACTION_NOISE)))
            points.append(
                TransactionPoint(
                    date=month_label(year, month),
                    year=year,
                    month=month,
                    volume=volume,
                )
            )
        return tuple(points)

    def _build_latest_indicators(self) -> MarketIndicators:
        history = self.historical()
        rates = self.interest_rate()
        latest = history[-1]
        prev_month = history[-2] if len(history) > 1 else latest
        prev_year = history[-13] if len(history) > 12 else history[0]

        return MarketIndicators(
            date=latest.date,
            hpi_seoul=latest.hpi_seoul,
            hpi_nation=latest.hpi_nation,
            hpi_gyeonggi=latest.hpi_gyeonggi,
            jeonse_seoul=latest.jeonse_seoul,
            jeonse_nation=latest.jeonse_nation,
            cpi=latest.cpi,
            interest_rate=rates[-1].rate,
            month_over_month=RegionChange(
                seoul=_pct_change(prev_month.hpi_seoul, latest.hpi_seoul),
                nation=_pct_change(prev_month.hpi_nation, latest.hpi_nation),
            ),
            year_over_year=RegionChange(
                seoul=_pct_change(prev_year.hpi_seoul, latest.hpi_seoul),
                nation=_pct_change(prev_year.hpi_nation, latest.hpi_nation),
            ),
        )


def _pct_change(before: float, after: float) -> float:
    return round((after - before) / before * 100, 2)
