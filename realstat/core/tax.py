"""Acquisition, transfer and holding taxes on residential property.

Bracket tables are in 원 and ordered by ascending upper limit, the last one
open-ended. Each bracket carries its quick deduction, so the tax on an
amount is `amount * rate - deduction` for the bracket that covers it, which
equals the cumulative progressive sum.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from realstat.core.mortgage import WON_PER_MANWON
from realstat.schemas.tax import (
    AcquisitionTax,
    AcquisitionTaxRequest,
    HoldingTax,
    HoldingTaxRequest,
    TransferTax,
    TransferTaxRequest,
)


@dataclass(frozen=True)
class TaxBracket:
    """Rate for amounts up to `limit` inclusive."""

    limit: float
    rate: float
    deduction: float = 0.0

    def covers(self, amount: float) -> bool:
        return amount <= self.limit


def bracket_for(table: Sequence[TaxBracket], amount: float) -> TaxBracket:
    """Return the first bracket covering `amount`."""
    for bracket in table:
        if bracket.covers(amount):
            return bracket
    return table[-1]


def progressive_tax(table: Sequence[TaxBracket], amount: float) -> float:
    if amount <= 0:
        return 0.0
    bracket = bracket_for(table, amount)
    return amount * bracket.rate - bracket.deduction


# 양도소득세 기본세율
BASIC_INCOME_TAX_BRACKETS = (
    TaxBracket(14_000_000, 0.06),
    TaxBracket(50_000_000, 0.15, 1_260_000),
    TaxBracket(88_000_000, 0.24, 5_760_000),
    TaxBracket(150_000_000, 0.35, 15_440_000),
    TaxBracket(300_000_000, 0.38, 19_940_000),
    TaxBracket(500_000_000, 0.40, 25_940_000),
    TaxBracket(1_000_000_000, 0.42, 35_940_000),
    TaxBracket(math.inf, 0.45, 65_940_000),
)

# 재산세, on the assessed value
PROPERTY_TAX_BRACKETS = (
    TaxBracket(60_000_000, 0.001),
    TaxBracket(150_000_000, 0.0015, 30_000),
    TaxBracket(300_000_000, 0.0025, 180_000),
    TaxBracket(math.inf, 0.004, 630_000),
)

# 종합부동산세, general rates
COMPREHENSIVE_TAX_BRACKETS = (
    TaxBracket(300_000_000, 0.005),
    TaxBracket(600_000_000, 0.007, 600_000),
    TaxBracket(1_200_000_000, 0.01, 2_400_000),
    TaxBracket(2_500_000_000, 0.013, 6_000_000),
    TaxBracket(5_000_000_000, 0.015, 11_000_000),
    TaxBracket(9_400_000_000, 0.02, 36_000_000),
    TaxBracket(math.inf, 0.027, 101_800_000),
)

# Acquisition tax; prices in 만원
SINGLE_HOME_LOW_PRICE = 60_000  # 6억
SINGLE_HOME_HIGH_PRICE = 90_000  # 9억
SINGLE_HOME_LOW_RATE = 0.01
SINGLE_HOME_HIGH_RATE = 0.03
FIRST_HOME_RELIEF = 0.015
FIRST_HOME_PRICE_CAP = 120_000
# house count -> (regulated area, elsewhere); None means the single-home rate
MULTI_HOME_RATES = {2: (0.08, None), 3: (0.12, 0.08)}
LAND_RATE = 0.04
LOCAL_EDUCATION_SHARE = 0.1
AGRICULTURAL_RATE = 0.002  # on homes priced above 6억

# Transfer tax
SHORT_HOLDING_RATES = ((1, 0.70), (2, 0.60))  # (held under N years, flat rate)
LOCAL_INCOME_TAX_SHARE = 0.1
SINGLE_HOME_DEDUCTION_PER_YEAR = 0.04
SINGLE_HOME_DEDUCTION_CAP = 0.4  # each for holding and for living
MULTI_HOME_DEDUCTION_PER_YEAR = 0.02
MULTI_HOME_DEDUCTION_CAP = 0.3
MULTI_HOME_DEDUCTION_MIN_YEARS = 3
MULTI_HOME_SURCHARGE = {2: 0.20, 3: 0.30}  # regulated areas only


def single_home_rate(price: float) -> float:
    """1% up to 6억, 3% above 9억, linear in between."""
    if price <= SINGLE_HOME_LOW_PRICE:
        return SINGLE_HOME_LOW_RATE
    if price <= SINGLE_HOME_HIGH_PRICE:
        span = SINGLE_HOME_HIGH_PRICE - SINGLE_HOME_LOW_PRICE
        step = SINGLE_HOME_HIGH_RATE - SINGLE_HOME_LOW_RATE
        return SINGLE_HOME_LOW_RATE + (price - SINGLE_HOME_LOW_PRICE) / span * step
    return SINGLE_HOME_HIGH_RATE


def acquisition_rate(request: AcquisitionTaxRequest) -> float:
    if request.property_type == "land":
        return LAND_RATE

    if request.house_count >= 2:
        regulated, elsewhere = MULTI_HOME_RATES[min(request.house_count, 3)]
        rate = regulated if request.is_adjusted_area else elsewhere
        return rate if rate is not None else single_home_rate(request.price)

    rate = single_home_rate(request.price)
    if request.is_first_time and request.price <= FIRST_HOME_PRICE_CAP:
        rate = max(0.0, rate - FIRST_HOME_RELIEF)
    return rate


def acquisition_tax(request: AcquisitionTaxRequest) -> AcquisitionTax:
    """Acquisition tax plus the local education and agricultural surtaxes."""
    rate = acquisition_rate(request)
    tax = request.price * rate
    education = tax * LOCAL_EDUCATION_SHARE
    agricultural = request.price * AGRICULTURAL_RATE if request.price > SINGLE_HOME_LOW_PRICE else 0.0
    total = tax + education + agricultural

    return AcquisitionTax(
        rate=rate * 100,
        acquisition_tax=tax,
        local_education_tax=education,
        agricultural_tax=agricultural,
        total_tax=total,
        effective_rate=total / request.price * 100 if request.price > 0 else 0.0,
    )


def long_term_deduction(house_count: int, holding_years: float, living_years: float) -> float:
    """Share of the gain exempted for long holdings (장기보유특별공제)."""
    if house_count == 1:
        holding = min(holding_years * SINGLE_HOME_DEDUCTION_PER_YEAR, SINGLE_HOME_DEDUCTION_CAP)
        living = min(living_years * SINGLE_HOME_DEDUCTION_PER_YEAR, SINGLE_HOME_DEDUCTION_CAP)
        return holding + living
    if holding_years >= MULTI_HOME_DEDUCTION_MIN_YEARS:
        return min((holding_years - 2) * MULTI_HOME_DEDUCTION_PER_YEAR, MULTI_HOME_DEDUCTION_CAP)
    return 0.0


def short_holding_rate(holding_years: float) -> Optional[float]:
    for years, rate in SHORT_HOLDING_RATES:
        if holding_years < years:
            return rate
    return None


def transfer_tax(request: TransferTaxRequest) -> TransferTax:
    """Transfer tax on a sale.

    Sales held under two years pay a flat rate on the taxable gain; longer
    holdings pay the progressive basic rates plus the multi-home surcharge
    in regulated areas. Local income tax adds 10% of the national tax.
    """
    gain = request.sale_price - request.purchase_price - request.acquisition_cost - request.transfer_cost
    if gain <= 0:
        return TransferTax(
            gain=gain,
            deduction_rate=0,
            taxable_gain=0,
            tax_rate=0,
            tax=0,
            local_tax=0,
            total_tax=0,
            net_profit=gain,
        )

    deduction = long_term_deduction(request.house_count, request.holding_years, request.living_years)
    taxable = gain * (1 - deduction)
    taxable_won = taxable * WON_PER_MANWON

    rate = short_holding_rate(request.holding_years)
    if rate is not None:
        tax_won = taxable_won * rate
    else:
        rate = bracket_for(BASIC_INCOME_TAX_BRACKETS, taxable_won).rate
        tax_won = progressive_tax(BASIC_INCOME_TAX_BRACKETS, taxable_won)
        if request.is_adjusted_area and request.house_count >= 2:
            tax_won += taxable_won * MULTI_HOME_SURCHARGE[min(request.house_count, 3)]

    tax = tax_won / WON_PER_MANWON
    local_tax = tax * LOCAL_INCOME_TAX_SHARE
    total = tax + local_tax

    return TransferTax(
        gain=gain,
        deduction_rate=deduction * 100,
        taxable_gain=taxable,
        tax_rate=rate * 100,
        tax=tax,
        local_tax=local_tax,
        total_tax=total,
        net_profit=gain - total,
    )


def property_tax(assessed_value: float) -> float:
    """Annual property tax in 만원 on an assessed value in 만원."""
    return progressive_tax(PROPERTY_TAX_BRACKETS, assessed_value * WON_PER_MANWON) / WON_PER_MANWON


def comprehensive_tax(taxable_value: float) -> float:
    """Comprehensive real-estate holding tax in 만원 on a taxable base in 만원."""
    return progressive_tax(COMPREHENSIVE_TAX_BRACKETS, taxable_value * WON_PER_MANWON) / WON_PER_MANWON


def holding_tax(request: HoldingTaxRequest) -> HoldingTax:
    levied = property_tax(request.assessed_value)
    comprehensive = comprehensive_tax(request.comprehensive_base)
    return HoldingTax(
        property_tax=levied,
        comprehensive_tax=comprehensive,
        total_tax=levied + comprehensive,
    )
