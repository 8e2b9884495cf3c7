from __future__ import annotations

from math import isclose

import pytest

from goal_tracker.core.formulas import future_value_annuity, inflation_adjust
from goal_tracker.core.projection import BREAK_EVEN_CONTRIBUTIONS, BasicProjectionEngine
from goal_tracker.domain.validation import FinancialInputError, validate_financial_inputs
from goal_tracker.schemas.calculations import (
    BreakEvenRequest,
    FutureValueRequest,
    InflationImpactRequest,
    RequiredContributionRequest,
)

engine = BasicProjectionEngine()


def test_validator_reports_every_violation():
    errors = validate_financial_inputs(
        target_amount=-1,
        current_amount=-1,
        monthly_contribution=-1,
        return_rate=0.31,
        inflation_rate=0.21,
        years=0,
    )
    assert len(errors) == 6


def test_validator_accepts_edges():
    assert validate_financial_inputs(
        target_amount=10_000_000,
        current_amount=0,
        monthly_contribution=0,
        return_rate=0.3,
        inflation_rate=0.0,
        years=50,
    ) == []


def test_required_contribution():
    result = engine.calculate_required_contribution(
        RequiredContributionRequest(targetAmount=12000, years=1, returnRate=0.05, inflationRate=0.0)
    )

    assert isclose(result.requiredMonthly, 977.29, abs_tol=0.01)
    assert result.months == 12
    assert result.inflationAdjustedTarget == 12000
    assert isclose(result.totalContributions + result.totalInterest, 12000, abs_tol=0.02)


def test_required_contribution_rejects_bad_inputs_all_at_once():
    with pytest.raises(FinancialInputError) as excinfo:
        engine.calculate_required_contribution(
            RequiredContributionRequest(targetAmount=-5, years=0, returnRate=0.5, inflationRate=0.3)
        )
    assert len(excinfo.value.errors) == 4


def test_future_value():
    result = engine.calculate_future_value(FutureValueRequest(monthlyContribution=100, years=1, returnRate=0.05))

    assert isclose(result.futureValue, 1227.89, abs_tol=0.01)
    assert result.totalContributions == 1200
    assert isclose(result.totalInterest, 27.89, abs_tol=0.01)
    assert isclose(result.realValue, 1203.81, abs_tol=0.01)


def test_future_value_rejects_negative_contribution():
    with pytest.raises(FinancialInputError) as excinfo:
        engine.calculate_future_value(FutureValueRequest(monthlyContribution=-1, years=-1, returnRate=0.05))
    assert len(excinfo.value.errors) == 2


def test_break_even_without_growth():
    entries = engine.calculate_break_even(BreakEvenRequest(targetAmount=12000, returnRate=0.0, inflationRate=0.0))

    assert [e.monthlyContribution for e in entries] == list(BREAK_EVEN_CONTRIBUTIONS)
    assert [e.months for e in entries] == [120, 48, 24, 16, 12, 8, 6]
    assert [e.years for e in entries] == [10.0, 4.0, 2.0, 1.3, 1.0, 0.7, 0.5]


def test_break_even_finds_smallest_month():
    params = BreakEvenRequest(targetAmount=30000, currentAmount=2000, returnRate=0.06, inflationRate=0.03)

    for entry in engine.calculate_break_even(params):
        def reached(months: int) -> bool:
            target = inflation_adjust(params.targetAmount, params.inflationRate, months / 12)
            projected = future_value_annuity(entry.monthlyContribution, params.returnRate, months, params.currentAmount)
            return projected >= target

        assert reached(entry.months)
        assert entry.months == 1 or not reached(entry.months - 1)


def test_break_even_omits_unreachable_tiers():
    entries = engine.calculate_break_even(BreakEvenRequest(targetAmount=100000, returnRate=0.0, inflationRate=0.0))
    assert entries[0].monthlyContribution == 250
    assert entries[0].months == 400

    nothing = engine.calculate_break_even(
        BreakEvenRequest(targetAmount=10_000_000, returnRate=0.0, inflationRate=0.02)
    )
    assert nothing == []


def test_compare_scenarios_tags_each_result():
    scenarios = [
        FutureValueRequest(name="Cautious", monthlyContribution=200, years=10, returnRate=0.03),
        FutureValueRequest(monthlyContribution=200, years=10, returnRate=0.07),
    ]

    results = engine.compare_scenarios(scenarios)

    assert [r.scenarioIndex for r in results] == [0, 1]
    assert [r.scenarioName for r in results] == ["Cautious", "Scenario 2"]
    assert results[1].futureValue > results[0].futureValue
    assert results[0].inputs == scenarios[0]


@pytest.mark.parametrize("count", [1, 6])
def test_compare_scenarios_requires_two_to_five(count):
    scenarios = [FutureValueRequest(monthlyContribution=100, years=1, returnRate=0.05)] * count
    with pytest.raises(FinancialInputError):
        engine.compare_scenarios(scenarios)


def test_compare_scenarios_reports_which_scenario_failed():
    scenarios = [
        FutureValueRequest(monthlyContribution=100, years=1, returnRate=0.05),
        FutureValueRequest(monthlyContribution=100, years=1, returnRate=0.9),
    ]
    with pytest.raises(FinancialInputError) as excinfo:
        engine.compare_scenarios(scenarios)
    assert excinfo.value.errors == ["scenario 2: return rate must be between 0% and 30%"]


def test_inflation_impact():
    result = engine.calculate_inflation_impact(InflationImpactRequest(amount=10000, years=5, inflationRate=0.02))

    assert isclose(result.futureNominalValue, 11040.81, abs_tol=0.01)
    assert isclose(result.realValueToday, 9057.31, abs_tol=0.01)
    assert isclose(result.purchasingPowerLoss, 942.69, abs_tol=0.01)
    assert result.inflationImpactPercentage == 10.41
    assert result.inflationRate == 2.0


def test_inflation_impact_rejects_bad_amount_and_years():
    with pytest.raises(FinancialInputError) as excinfo:
        engine.calculate_inflation_impact(InflationImpactRequest(amount=0, years=0))
    assert len(excinfo.value.errors) == 2


@pytest.mark.parametrize("years", [1e-20, 0.05])
def test_horizon_shorter_than_a_month_is_rejected(years):
    assert validate_financial_inputs(years=years) == ["time period must be at least one month"]

    with pytest.raises(FinancialInputError):
        engine.calculate_required_contribution(RequiredContributionRequest(targetAmount=1000, years=years))


def test_one_month_horizon_is_accepted():
    result = engine.calculate_required_contribution(
        RequiredContributionRequest(targetAmount=1000, years=1 / 12, returnRate=0.0, inflationRate=0.0)
    )
    assert isclose(result.requiredMonthly, 1000)
