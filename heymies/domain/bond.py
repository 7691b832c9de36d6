# heymies/domain/bond.py
from __future__ import annotations

import math

from .types import BondInputs, BondResult


def term_months(years: float) -> int:
    # half-up, never below one month
    return max(1, math.floor(years * 12 + 0.5))


def compute_monthly_payment(principal: float, annual_rate_percent: float, years: float) -> float:
    """
    Fixed-rate amortizing repayment.

    Inputs must already be finite and non-negative (see domain.parsing.clean_amount).
    A zero rate falls back to straight-line repayment.
    """
    r = (annual_rate_percent / 100) / 12
    n = term_months(years)
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * (r * growth) / (growth - 1)


def compute_bond(inputs: BondInputs) -> BondResult:
    principal = max(0.0, inputs.price - inputs.deposit)
    n = term_months(inputs.term_years)
    payment = compute_monthly_payment(principal, inputs.annual_rate_percent, inputs.term_years)
    total_paid = payment * n
    return BondResult(
        principal=principal,
        months=n,
        monthly_payment=payment,
        total_paid=total_paid,
        total_interest=max(0.0, total_paid - principal),
    )
