from __future__ import annotations

from math import isclose, isfinite

import pytest
from pydantic import ValidationError

from realstat.core.simulation import (
    MAX_RATIO,
    annualized_roi,
    capital_gains_tax,
    monthly_payment,
    run_simulation,
    simulate,
)
from realstat.schemas.simulation import SimulationInput, SimulationResult


def closed_form_payment(loan: float, annual_rate: float, years: int) -> float:
    r = annual_rate / 100 / 12
    n = years * 12
    return loan * r * (1 + r) ** n / ((1 + r) ** n - 1)


def test_monthly_payment_matches_closed_form():
    payment = monthly_payment(80000, 4.5, 30)

    assert isclose(payment, closed_form_payment(80000, 4.5, 30), abs_tol=0.01)
    assert payment == pytest.approx(405.35, abs=0.01)


def test_monthly_payment_edge_cases():
    assert monthly_payment(0, 4.5, 30) == 0
    assert monthly_payment(12000, 0, 10) == pytest.approx(100.0)
    assert monthly_payment(12000, 5, 0) == 0


def test_default_inputs_split_equity_and_loan():
    result = simulate(SimulationInput())

    assert result.equity_amount == pytest.approx(30000)
    assert result.loan_amount == pytest.approx(70000)
    assert result.monthly_payment == pytest.approx(closed_form_payment(70000, 4.5, 30))

    start = result.yearly_data[0]
    assert start.year == 0
    assert start.property_value == 100000
    assert start.remaining_loan == 70000
    assert start.total_cashflow == -30000
    assert start.equity == 30000


def test_annual_net_income_formula():
    inputs = SimulationInput()
    result = simulate(inputs)

    payment = closed_form_payment(70000, 4.5, 30)
    expected = 150 * 12 * 0.95 + 10000 * 0.03 - 20 * 12 - 100000 * 0.003 - payment * 12
    assert isclose(result.annual_net_income, expected, rel_tol=1e-9)
    assert isclose(result.monthly_net_income, expected / 12, rel_tol=1e-9)
    assert isclose(result.cash_yield, expected / 30000 * 100, rel_tol=1e-9)


def test_zero_loan_has_no_payment_or_balance():
    result = simulate(SimulationInput(equity_ratio=100))

    assert result.loan_amount == 0
    assert result.monthly_payment == 0
    assert all(row.remaining_loan == 0 for row in result.yearly_data)


def test_pure_carrying_cost_loses_money():
    inputs = SimulationInput(
        purchase_price=50000,
        equity_ratio=40,
        expected_appreciation=0,
        monthly_rent=0,
        deposit=0,
        maintenance_cost=10,
        property_tax=0.2,
        holding_period=5,
    )
    result = simulate(inputs)

    assert result.capital_gains_tax == 0
    assert result.total_profit < 0
    assert result.total_roi < 0
    assert result.annualized_roi < 0


@pytest.mark.parametrize("holding_period", [1, 2, 7, 30, 50])
def test_projection_has_one_row_per_year_including_purchase(holding_period):
    result = simulate(SimulationInput(holding_period=holding_period))

    assert len(result.yearly_data) == holding_period + 1
    assert [row.year for row in result.yearly_data] == list(range(holding_period + 1))


def test_row_count_across_full_range():
    for holding_period in range(1, 51):
        result = simulate(SimulationInput(holding_period=holding_period, loan_term=10))
        assert len(result.yearly_data) == holding_period + 1


def test_remaining_loan_declines_straight_line_and_floors_at_zero():
    result = simulate(SimulationInput(loan_term=5, holding_period=8))
    balances = [row.remaining_loan for row in result.yearly_data]

    assert balances[:6] == [70000, 56000, 42000, 28000, 14000, 0]
    assert balances[6:] == [0, 0, 0]


def test_appreciation_compounds_after_year_zero():
    result = simulate(SimulationInput(expected_appreciation=10, holding_period=2))
    values = [row.property_value for row in result.yearly_data]

    assert values == [100000, 110000, 121000]
    assert result.final_value == 121000
    assert result.total_appreciation == 21000


def test_capital_gains_tax_brackets():
    assert capital_gains_tax(1000, 0.5) == pytest.approx(1000 * 0.85 * 0.50)
    assert capital_gains_tax(1000, 1) == pytest.approx(1000 * 0.85 * 0.40)
    assert capital_gains_tax(1000, 1.999) == pytest.approx(1000 * 0.85 * 0.40)
    assert capital_gains_tax(1000, 2) == pytest.approx(1000 * 0.85 * 0.24)
    assert capital_gains_tax(-500, 5) == 0
    assert capital_gains_tax(0, 5) == 0


def test_two_year_hold_uses_long_term_rate():
    result = simulate(SimulationInput(expected_appreciation=5, holding_period=2))

    assert result.total_appreciation > 0
    assert result.capital_gains_tax == pytest.approx(result.total_appreciation * 0.85 * 0.24)


def test_one_year_hold_uses_mid_term_rate():
    result = simulate(SimulationInput(expected_appreciation=5, holding_period=1))

    assert result.capital_gains_tax == pytest.approx(result.total_appreciation * 0.85 * 0.40)


def test_total_profit_composition():
    result = simulate(SimulationInput())
    last = result.yearly_data[-1]

    expected = (
        (last.property_value - last.remaining_loan)
        - result.equity_amount
        + result.annual_net_income * 10
        - result.capital_gains_tax
    )
    assert isclose(result.total_profit, expected, rel_tol=1e-9)
    assert isclose(result.total_roi, expected / result.equity_amount * 100, rel_tol=1e-9)
    assert isclose(
        result.annualized_roi,
        ((1 + result.total_roi / 100) ** (1 / 10) - 1) * 100,
        rel_tol=1e-9,
    )


def test_jeonse_ignores_rent():
    rent = simulate(SimulationInput(investment_type="rent"))
    jeonse = simulate(SimulationInput(investment_type="jeonse"))
    gap = simulate(SimulationInput(investment_type="gap"))

    assert isclose(rent.annual_net_income - jeonse.annual_net_income, 150 * 12 * 0.95)
    assert gap.annual_net_income == rent.annual_net_income


def test_jeonse_counts_deposit_interest_only():
    inputs = SimulationInput(
        investment_type="jeonse",
        equity_ratio=100,
        deposit=20000,
        maintenance_cost=0,
        property_tax=0,
    )
    assert simulate(inputs).annual_net_income == pytest.approx(600)
    assert simulate(inputs, deposit_yield=0.05).annual_net_income == pytest.approx(1000)


def test_zero_holding_period_reports_zero_cagr():
    result, warnings = run_simulation(SimulationInput(holding_period=0))

    assert len(result.yearly_data) == 1
    assert result.annualized_roi == 0
    assert "holding_period" in warnings


def test_zero_equity_reports_zero_roi():
    result = simulate(SimulationInput(equity_ratio=0))

    assert result.cash_yield == 0
    assert result.total_roi == 0


def test_zero_loan_term_does_not_divide_by_zero():
    result, warnings = run_simulation(SimulationInput(loan_term=0))

    assert result.monthly_payment == 0
    assert all(row.remaining_loan == 70000 for row in result.yearly_data)
    assert "loan_term" in warnings


def test_annualized_roi_guards():
    assert annualized_roi(21, 2) == pytest.approx(10.0)
    assert annualized_roi(50, 0) == 0
    assert annualized_roi(-100, 3) == -100
    assert annualized_roi(-250, 3) == -100


def numeric_values(result: SimulationResult):
    for name, value in result.model_dump(exclude={"yearly_data"}).items():
        yield name, value
    for row in result.yearly_data:
        for name, value in row.model_dump().items():
            yield f"yearly_data[{row.year}].{name}", value


@pytest.mark.parametrize(
    "overrides",
    [
        {"expected_appreciation": 1000, "holding_period": 100},
        {"expected_appreciation": -1000, "holding_period": 100},
        {"loan_rate": 30, "loan_term": 100},
        {"loan_rate": 1000, "loan_term": 100},
        {"loan_rate": -1000, "loan_term": 100},
        {"loan_term": 80, "holding_period": 60},
        {"purchase_price": 1e-300, "maintenance_cost": 1e12},
        {"purchase_price": 1e12, "equity_ratio": -1000, "vacancy_rate": -1000},
        {"holding_period": -100, "loan_term": -100},
    ],
)
def test_extreme_inputs_keep_every_field_finite(overrides):
    result = simulate(SimulationInput(**overrides))

    for name, value in numeric_values(result):
        assert isfinite(value), name


def test_monthly_payment_survives_overflowing_growth():
    # (1 + 0.025) ** 60000 is past the float range
    payment = monthly_payment(80000, 30, 5000)

    assert isfinite(payment)
    assert payment == pytest.approx(80000 * 0.025)


def test_monthly_payment_with_negligible_rate_repays_evenly():
    assert monthly_payment(12000, 1e-15, 10) == pytest.approx(100)


def test_tiny_equity_clamps_ratios():
    result = simulate(SimulationInput(purchase_price=1e-300, maintenance_cost=1e12))

    assert result.cash_yield == -MAX_RATIO
    assert result.total_roi == -MAX_RATIO
    assert result.annualized_roi == -100


@pytest.mark.parametrize(
    "overrides",
    [
        {"expected_appreciation": 1e10, "holding_period": 50},
        {"loan_rate": 30, "loan_term": 5000},
        {"holding_period": 200000},
        {"purchase_price": 1e300},
        {"purchase_price": float("inf")},
        {"expected_appreciation": float("nan")},
    ],
)
def test_values_past_the_magnitude_caps_are_rejected(overrides):
    with pytest.raises(ValidationError):
        SimulationInput(**overrides)
