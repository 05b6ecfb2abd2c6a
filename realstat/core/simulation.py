"""Investment simulation: equity/loan split, amortization and ROI.

Order of operations:
  1) Split the purchase price into equity and loan.
  2) Equal-installment monthly payment on the loan.
  3) Annual net income from rent (or deposit interest only for jeonse)
     minus maintenance, property tax and loan payments.
  4) Year-by-year projection for years 0..holding_period inclusive.
  5) Sale: capital-gains tax, total profit, total ROI and CAGR.
"""

from __future__ import annotations

import sys
from typing import Dict, List, Tuple

from realstat.domain.validation import validate_inputs
from realstat.schemas.simulation import SimulationInput, SimulationResult, YearlyProjection

DEPOSIT_YIELD = 0.03

# Share of the nominal gain that is taxable (15% assumed expenses)
TAXABLE_GAIN_SHARE = 0.85
SHORT_TERM_TAX_RATE = 0.50  # held < 1 year
MID_TERM_TAX_RATE = 0.40  # 1 <= held < 2 years
LONG_TERM_TAX_RATE = 0.24  # held >= 2 years

# Ceiling for percent ratios; 1 + MAX_RATIO / 100 must stay finite
MAX_RATIO = sys.float_info.max / 1000


def monthly_payment(loan: float, annual_rate: float, term_years: float) -> float:
    """Equal-installment payment M = L * r(1+r)^n / ((1+r)^n - 1).

    `annual_rate` is a percent. A zero loan or non-positive term pays
    nothing; a zero rate repays the principal evenly.
    """
    months = term_years * 12
    if loan <= 0 or months <= 0:
        return 0.0
    r = annual_rate / 100 / 12
    if r == 0:
        return loan / months
    try:
        growth = (1 + r) ** months
    except OverflowError:
        # growth / (growth - 1) has converged to 1
        return loan * r
    if growth == 1:
        # rate too small to register in (1 + r)
        return loan / months
    if growth > 1:
        return loan * r / (1 - 1 / growth)
    return loan * r * growth / (growth - 1)


def capital_gains_tax(gain: float, holding_years: float) -> float:
    """Simplified transfer tax on the sale gain; losses are not taxed."""
    if gain <= 0:
        return 0.0
    taxable = gain * TAXABLE_GAIN_SHARE
    if holding_years >= 2:
        return taxable * LONG_TERM_TAX_RATE
    if holding_years >= 1:
        return taxable * MID_TERM_TAX_RATE
    return taxable * SHORT_TERM_TAX_RATE


def percent_of(amount: float, base: float) -> float:
    """`amount / base` in percent, 0 for a non-positive base.

    A tiny base can push the ratio past the float range; it is clamped so
    the result stays finite.
    """
    if base <= 0:
        return 0.0
    return max(-MAX_RATIO, min(MAX_RATIO, amount / base * 100))


def annualized_roi(total_roi: float, holding_years: float) -> float:
    """CAGR in percent from a total ROI in percent.

    Zero-length holdings have no defined CAGR and report 0; a loss of the
    whole stake or more reports -100.
    """
    if holding_years <= 0:
        return 0.0
    base = 1 + total_roi / 100
    if base <= 0:
        return -100.0
    return (base ** (1 / holding_years) - 1) * 100


def annual_net_income(inputs: SimulationInput, payment: float, deposit_yield: float = DEPOSIT_YIELD) -> float:
    deposit_interest = inputs.deposit * deposit_yield
    maintenance = inputs.maintenance_cost * 12
    property_tax = inputs.purchase_price * (inputs.property_tax / 100)
    loan_payments = payment * 12

    income = deposit_interest
    if inputs.investment_type != "jeonse":
        income += inputs.monthly_rent * 12 * (1 - inputs.vacancy_rate / 100)
    return income - maintenance - property_tax - loan_payments


def project_years(
    inputs: SimulationInput,
    equity_amount: float,
    loan_amount: float,
    net_income: float,
) -> List[YearlyProjection]:
    """Rows for years 0..holding_period; year 0 is the purchase itself."""
    # Straight-line principal share; a non-positive term never amortizes
    principal_share = loan_amount / inputs.loan_term if inputs.loan_term > 0 else 0.0
    growth = inputs.expected_appreciation / 100

    value = inputs.purchase_price
    remaining = loan_amount
    cashflow = -equity_amount

    rows: List[YearlyProjection] = []
    for year in range(0, max(inputs.holding_period, 0) + 1):
        if year > 0:
            value += value * growth
            remaining = max(0.0, remaining - principal_share)
            cashflow += net_income

        rows.append(
            YearlyProjection(
                year=year,
                property_value=round(value),
                equity=round(value - remaining),
                total_cashflow=round(cashflow),
                remaining_loan=round(remaining),
            )
        )
    return rows


def simulate(inputs: SimulationInput, deposit_yield: float = DEPOSIT_YIELD) -> SimulationResult:
    """Compute the full projection for one input. Pure; never raises on numbers."""
    equity_amount = inputs.purchase_price * (inputs.equity_ratio / 100)
    loan_amount = inputs.purchase_price - equity_amount

    payment = monthly_payment(loan_amount, inputs.loan_rate, inputs.loan_term)
    net_income = annual_net_income(inputs, payment, deposit_yield)
    cash_yield = percent_of(net_income, equity_amount)

    yearly = project_years(inputs, equity_amount, loan_amount, net_income)
    last = yearly[-1]
    holding = max(inputs.holding_period, 0)

    final_value = last.property_value
    appreciation = final_value - inputs.purchase_price
    tax = capital_gains_tax(appreciation, holding)

    final_equity = final_value - last.remaining_loan
    total_profit = final_equity - equity_amount + net_income * holding - tax
    total_roi = percent_of(total_profit, equity_amount)

    return SimulationResult(
        equity_amount=equity_amount,
        loan_amount=loan_amount,
        monthly_payment=payment,
        annual_net_income=net_income,
        monthly_net_income=net_income / 12,
        cash_yield=cash_yield,
        yearly_data=yearly,
        final_value=final_value,
        total_appreciation=appreciation,
        capital_gains_tax=tax,
        total_profit=total_profit,
        total_roi=total_roi,
        annualized_roi=annualized_roi(total_roi, holding),
    )


def run_simulation(
    inputs: SimulationInput, deposit_yield: float = DEPOSIT_YIELD
) -> Tuple[SimulationResult, Dict[str, str]]:
    """Simulate and collect advisory field warnings for the same input."""
    return simulate(inputs, deposit_yield), validate_inputs(inputs)
