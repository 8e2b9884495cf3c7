"""
Closed-form savings formulas.

Rates are annual decimals (0.05 == 5%). Monthly compounding uses the nominal
conversion annual_rate / 12 everywhere; existing expected outputs depend on it,
so do not switch to (1 + annual) ** (1 / 12) - 1.
"""

from __future__ import annotations

from datetime import date
from typing import List

from goal_tracker.schemas.projection import ProjectionPoint

DAYS_PER_YEAR = 365.25


def round_money(value: float) -> float:
    return round(value, 2)


def future_value_annuity(pmt: float, annual_rate: float, months: float, present_value: float = 0.0) -> float:
    """
    FV = PV * (1 + r)^n + PMT * ((1 + r)^n - 1) / r, with r = annual_rate / 12.
    Zero rate degenerates to PV + PMT * n.
    """
    if annual_rate == 0:
        return present_value + pmt * months

    r = annual_rate / 12
    growth = (1 + r) ** months
    return present_value * growth + pmt * (growth - 1) / r


def required_payment(
    future_value_target: float,
    annual_rate: float,
    months: float,
    present_value: float = 0.0,
) -> float:
    """
    Monthly payment that makes future_value_annuity(...) hit the target.

    A negative result means present_value alone already compounds past the
    target. Callers rely on that sign, so it is returned as-is.
    """
    if months == 0:
        raise ValueError("required_payment needs a horizon of at least one month")

    r = annual_rate / 12
    growth = (1 + r) ** months
    # growth rounds to exactly 1.0 for zero rates and vanishing horizons
    if annual_rate == 0 or growth == 1:
        return (future_value_target - present_value) / months

    shortfall = future_value_target - present_value * growth
    return shortfall * r / (growth - 1)


def inflation_adjust(value: float, rate: float, years: float) -> float:
    return value * (1 + rate) ** years


def present_value(future_value: float, rate: float, years: float) -> float:
    return future_value / (1 + rate) ** years


def calculate_progress(current: float, target: float) -> float:
    """Percent of target reached, always within [0, 100]."""
    if target <= 0:
        return 0.0
    return max(0.0, min(current / target * 100, 100.0))


def compound_interest(principal: float, rate: float, years: float, compound_frequency: int = 12) -> float:
    return principal * (1 + rate / compound_frequency) ** (compound_frequency * years)


def effective_annual_rate(nominal_rate: float, compound_frequency: int) -> float:
    return (1 + nominal_rate / compound_frequency) ** compound_frequency - 1


def years_between(start: date, end: date) -> float:
    """Signed fractional years from start to end (negative if end is earlier)."""
    return (end - start).days / DAYS_PER_YEAR


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def generate_projection(
    *,
    monthly_contribution: float,
    return_rate: float,
    inflation_rate: float,
    target_amount: float,
    current_value: float,
    months: int,
) -> List[ProjectionPoint]:
    """
    Month-by-month path: grow the balance for the month, then add the
    contribution. The target moves with inflation so progress is measured
    against purchasing power at that month.
    """
    monthly_rate = return_rate / 12
    value = current_value
    points: List[ProjectionPoint] = []

    for month in range(1, months + 1):
        value = value * (1 + monthly_rate) + monthly_contribution
        target = inflation_adjust(target_amount, inflation_rate, month / 12)
        points.append(
            ProjectionPoint(
                month=month,
                value=round_money(value),
                target=round_money(target),
                progress=round(calculate_progress(value, target), 2),
            )
        )

    return points
