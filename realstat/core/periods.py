"""Calendar windows and piecewise rate tables used by the series generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")

# (year, month); quarters are addressed through their first month
YearMonth = Tuple[int, int]


@dataclass(frozen=True)
class RateBand(Generic[T]):
    """Value that applies to every month in [start, end] inclusive."""

    start: YearMonth
    end: YearMonth
    value: T

    def covers(self, year: int, month: int) -> bool:
        return self.start <= (year, month) <= self.end


def years(first: int, last: int, value: T) -> RateBand[T]:
    """Band spanning whole calendar years `first`..`last`."""
    return RateBand(start=(first, 1), end=(last, 12), value=value)


def months(start: YearMonth, end: YearMonth, value: T) -> RateBand[T]:
    return RateBand(start=start, end=end, value=value)


def lookup(table: Sequence[RateBand[T]], year: int, month: int = 1, *, default: T) -> T:
    """Return the value of the first band covering the period.

    Tables are ordered so narrower overrides come before the wider band they
    refine; periods no band covers get `default`.
    """
    for band in table:
        if band.covers(year, month):
            return band.value
    return default


def iter_months(start: YearMonth, end: YearMonth) -> Iterator[YearMonth]:
    """Yield every (year, month) from start to end inclusive."""
    year, month = start
    while (year, month) <= end:
        yield year, month
        month += 1
        if month > 12:
            month = 1
            year += 1


def iter_quarters(start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[Tuple[int, int]]:
    """Yield every (year, quarter) from start to end inclusive."""
    year, quarter = start
    while (year, quarter) <= end:
        yield year, quarter
        quarter += 1
        if quarter > 4:
            quarter = 1
            year += 1


def month_label(year: int, month: int) -> str:
    return f"{year}.{month:02d}"


def quarter_label(year: int, quarter: int) -> str:
    return f"{year} Q{quarter}"


def quarter_month(quarter: int) -> int:
    """First month of a quarter, so quarterly overrides can share month bands."""
    return (quarter - 1) * 3 + 1
