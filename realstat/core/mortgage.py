"""Mortgage repayment schedules and lending-regulation ratios."""

from __future__ import annotations

import math
from typing import List

from realstat.core.simulation import monthly_payment
from realstat.schemas.mortgage import (
    JeonseLoan,
    LendingRatios,
    RepaymentRow,
    RepaymentSchedule,
    RepaymentType,
)

WON_PER_MANWON = 10_000
MAX_SCHEDULE_MONTHS = 360
DSR_CAP = 0.4
LTV_CAP = 0.7
JEONSE_LOAN_SHARE = 0.8


def repayment_schedule(
    loan_amount: float,
    interest_rate: float,
    loan_term: int,
    repayment_type: RepaymentType = "equal_installment",
) -> RepaymentSchedule:
    """Month-by-month amortization, reported for the first year and each year end.

    The term is capped at 30 years; totals cover every simulated month.
    """
    principal = loan_amount * WON_PER_MANWON
    r = interest_rate / 100 / 12
    months = min(loan_term * 12, MAX_SCHEDULE_MONTHS)
    level_payment = monthly_payment(principal, interest_rate, months / 12)

    remaining = principal
    total_interest = 0.0
    rows: List[RepaymentRow] = []

    for month in range(1, months + 1):
        interest = remaining * r
        if repayment_type == "equal_principal":
            principal_part = principal / months
            payment = principal_part + interest
        else:
            payment = level_payment
            principal_part = payment - interest

        total_interest += interest
        remaining -= principal_part

        if month <= 12 or month % 12 == 0:
            rows.append(
                RepaymentRow(
                    month=month,
                    year=math.ceil(month / 12),
                    monthly_payment=payment,
                    principal_payment=principal_part,
                    interest_payment=interest,
                    remaining_principal=max(0.0, remaining),
                    total_interest=total_interest,
                )
            )

    return RepaymentSchedule(
        schedule=rows,
        total_interest=total_interest,
        total_payment=principal + total_interest,
    )


def lending_ratios(
    property_price: float,
    annual_income: float,
    loan_amount: float,
    loan_term: int,
    interest_rate: float,
    existing_loan_payment: float = 0.0,
) -> LendingRatios:
    """DSR/LTV/DTI for a prospective loan; amounts in 만원."""
    payment = monthly_payment(loan_amount * WON_PER_MANWON, interest_rate, loan_term)
    annual_payment = payment * 12
    income = annual_income * WON_PER_MANWON
    existing = existing_loan_payment * WON_PER_MANWON * 12

    dsr = (annual_payment + existing) / income * 100 if income > 0 else 0.0
    dti = annual_payment / income * 100 if income > 0 else 0.0
    ltv = loan_amount / property_price * 100 if property_price > 0 else 0.0

    if income > 0 and annual_payment > 0:
        max_by_dsr = math.floor((income * DSR_CAP - existing) / annual_payment * loan_amount)
    else:
        max_by_dsr = 0
    max_by_ltv = math.floor(property_price * LTV_CAP)

    return LendingRatios(
        dsr=dsr,
        ltv=ltv,
        dti=dti,
        monthly_payment=payment,
        max_loan_by_dsr=max_by_dsr,
        max_loan_by_ltv=max_by_ltv,
        loanable_max=min(max_by_dsr, max_by_ltv),
    )


def jeonse_loan(deposit: float, rate: float) -> JeonseLoan:
    max_loan = math.floor(deposit * JEONSE_LOAN_SHARE)
    monthly_interest = max_loan * WON_PER_MANWON * (rate / 100) / 12
    return JeonseLoan(max_loan=max_loan, monthly_interest=monthly_interest)
