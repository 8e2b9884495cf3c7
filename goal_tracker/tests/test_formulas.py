from __future__ import annotations

import itertools
from datetime import date
from math import isclose

import pytest

from goal_tracker.core.formulas import (
    calculate_progress,
    compound_interest,
    effective_annual_rate,
    future_value_annuity,
    generate_projection,
    inflation_adjust,
    months_between,
    present_value,
    required_payment,
    years_between,
)


def test_future_value_known_values():
    assert isclose(future_value_annuity(100, 0.05, 12, 0), 1227.89, abs_tol=0.01)
    assert isclose(future_value_annuity(100, 0.05, 12, 1000), 2279.05, abs_tol=0.01)
    assert isclose(future_value_annuity(0.01, 0.05, 12, 0), 0.1228, abs_tol=0.0001)


def test_future_value_pure_compounding_and_pure_annuity():
    # pmt=0 is plain monthly compounding of the present value
    assert isclose(future_value_annuity(0, 0.06, 24, 5000), 5000 * (1 + 0.005) ** 24)
    # pv=0 is the annuity term alone
    assert isclose(future_value_annuity(200, 0.06, 24, 0), 200 * ((1.005 ** 24) - 1) / 0.005)


@pytest.mark.parametrize(
    "pmt, months, pv",
    list(itertools.product([0, 1, 250.5], [0, 1, 37, 600], [0, 99.99, 10000])),
)
def test_zero_rate_identity(pmt, months, pv):
    assert future_value_annuity(pmt, 0, months, pv) == pv + pmt * months


def test_required_payment_known_values():
    assert required_payment(12000, 0, 12, 0) == 1000
    assert isclose(required_payment(12000, 0.05, 12, 0), 977.29, abs_tol=0.005)
    assert isclose(required_payment(12000, 0.05, 12, 1000), 891.68, abs_tol=0.005)


def test_required_payment_is_negative_when_already_funded():
    assert required_payment(1000, 0.05, 12, 1200) < 0
    assert required_payment(1000, 0.0, 12, 1200) < 0


def test_required_payment_rejects_zero_month_horizon():
    with pytest.raises(ValueError):
        required_payment(1000, 0.05, 0, 0)


def test_required_payment_survives_vanishing_horizon():
    # (1 + r) ** months rounds to exactly 1.0 here
    assert required_payment(1000, 0.05, 1e-20, 0) == 1000 / 1e-20
    assert required_payment(1000, 0.05, 1e-20, 400) == 600 / 1e-20


@pytest.mark.parametrize("rate", [0.0, 0.01, 0.05, 0.12, 0.3])
@pytest.mark.parametrize("months", [1, 12, 119, 360])
@pytest.mark.parametrize("pv_share", [0.0, 0.25, 1.0])
def test_required_payment_inverts_future_value(rate, months, pv_share):
    target = 25000.0
    pv = target * pv_share
    pmt = required_payment(target, rate, months, pv)
    assert isclose(future_value_annuity(pmt, rate, months, pv), target, rel_tol=1e-9, abs_tol=0.01)


def test_ten_year_goal_round_trip():
    months = 10 * 12
    pmt = required_payment(50000, 0.06, months, 0)
    assert isclose(future_value_annuity(pmt, 0.06, months, 0), 50000, abs_tol=0.01)


def test_required_payment_monotonicity():
    payments_by_pv = [required_payment(20000, 0.04, 60, pv) for pv in (0, 1000, 5000, 15000)]
    assert all(a > b for a, b in zip(payments_by_pv, payments_by_pv[1:]))

    payments_by_target = [required_payment(t, 0.04, 60, 2000) for t in (5000, 10000, 20000, 40000)]
    assert all(a < b for a, b in zip(payments_by_target, payments_by_target[1:]))


def test_inflation_adjust():
    assert isclose(inflation_adjust(10000, 0.02, 5), 11040.81, abs_tol=0.005)
    assert inflation_adjust(10000, 0, 5) == 10000
    assert isclose(inflation_adjust(10000, 0.1, 10), 25937.42, abs_tol=0.005)
    assert isclose(inflation_adjust(10000, 0.02, 2.5), 10507.53, abs_tol=0.01)


@pytest.mark.parametrize("value, rate, years", [(1, 0.0, 3), (10000, 0.02, 5), (432.1, 0.2, 0.75), (1e6, 0.07, 30)])
def test_inflation_round_trip(value, rate, years):
    assert isclose(present_value(inflation_adjust(value, rate, years), rate, years), value, rel_tol=1e-12)


def test_progress_bounds():
    assert calculate_progress(5000, 10000) == 50
    assert calculate_progress(15000, 10000) == 100
    assert calculate_progress(0, 10000) == 0
    assert calculate_progress(5000, 0) == 0
    assert calculate_progress(5000, -10) == 0
    for current in (0, 0.01, 1, 999, 1e9):
        for target in (-1, 0, 0.5, 1000, 1e7):
            assert 0 <= calculate_progress(current, target) <= 100


def test_compound_interest_and_effective_rate():
    assert isclose(compound_interest(1000, 0.12, 1, 12), 1000 * 1.01 ** 12)
    assert isclose(compound_interest(1000, 0.05, 2, 1), 1102.5)
    assert isclose(effective_annual_rate(0.12, 12), 1.01 ** 12 - 1)
    assert isclose(effective_annual_rate(0.05, 1), 0.05)


def test_date_helpers():
    assert isclose(years_between(date(2024, 1, 1), date(2026, 1, 1)), 731 / 365.25)
    assert years_between(date(2026, 1, 1), date(2024, 1, 1)) < 0
    assert months_between(date(2024, 11, 30), date(2025, 2, 1)) == 3


def test_generate_projection_steps():
    points = generate_projection(
        monthly_contribution=100,
        return_rate=0.12,
        inflation_rate=0.0,
        target_amount=1000,
        current_value=1000,
        months=3,
    )
    assert [p.month for p in points] == [1, 2, 3]
    # grow first, then add the contribution
    assert points[0].value == 1110.0
    assert points[1].value == 1221.1
    assert all(p.target == 1000 for p in points)
    assert all(p.progress == 100 for p in points)
