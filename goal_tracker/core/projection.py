from __future__ import annotations

import math
from datetime import date
from typing import List, Optional, Sequence

from goal_tracker.core.formulas import (
    calculate_progress,
    future_value_annuity,
    generate_projection,
    inflation_adjust,
    present_value,
    required_payment,
    round_money,
    years_between,
)
from goal_tracker.domain.validation import (
    FinancialInputError,
    ensure_horizon_within_limit,
    ensure_valid_inputs,
)
from goal_tracker.models import Contribution, Goal, current_value
from goal_tracker.schemas.calculations import (
    BreakEvenEntry,
    BreakEvenRequest,
    FutureValueRequest,
    FutureValueResult,
    InflationImpactRequest,
    InflationImpactResult,
    RequiredContributionRequest,
    RequiredContributionResult,
    ScenarioComparison,
)
from goal_tracker.schemas.projection import GoalStatus, ProjectionResult

# Longer horizons keep exact summary figures but a truncated series.
MAX_SERIES_MONTHS = 120

BREAK_EVEN_CONTRIBUTIONS = (100, 250, 500, 750, 1000, 1500, 2000)
BREAK_EVEN_MAX_MONTHS = 600

ON_TRACK_RATIO = 0.95
CLOSE_RATIO = 0.8

MIN_SCENARIOS = 2
MAX_SCENARIOS = 5


def years_to_target(goal: Goal, today: Optional[date] = None) -> float:
    """
    Horizon in years: explicit target_years wins, then the distance to
    target_date (never negative), otherwise 0 ("already due").
    Raises FinancialInputError past the 50-year limit.
    """
    if goal.target_years:
        years = float(goal.target_years)
    elif goal.target_date is not None:
        years = max(0.0, years_between(today or date.today(), goal.target_date))
    else:
        years = 0.0

    ensure_horizon_within_limit(years)
    return years


def determine_goal_status(progress: float, monthly_contribution: float, required_monthly: float) -> GoalStatus:
    """
    Ordered buckets, first match wins:
      completed -> progress >= 100
      on_track  -> contribution >= 95% of required
      close     -> contribution >= 80% of required
      behind    -> everything else (carries the monthly deficit)
    """
    if progress >= 100:
        return GoalStatus(status="completed", message="Goal reached!", color="green", priority="low")

    if monthly_contribution >= required_monthly * ON_TRACK_RATIO:
        return GoalStatus(status="on_track", message="On track", color="green", priority="low")

    if monthly_contribution >= required_monthly * CLOSE_RATIO:
        return GoalStatus(status="close", message="Close to target", color="yellow", priority="medium")

    deficit = required_monthly - monthly_contribution
    return GoalStatus(
        status="behind",
        message=f"You need +{round(deficit):,}/month",
        color="red",
        priority="high",
        deficit=round_money(deficit),
    )


class BasicProjectionEngine:
    """Deterministic projections and calculators built on goal_tracker.core.formulas."""

    def calculate_goal_projection(
        self,
        goal: Goal,
        contributions: Sequence[Contribution] = (),
        today: Optional[date] = None,
    ) -> ProjectionResult:
        current = current_value(list(contributions))
        years = years_to_target(goal, today)
        months = math.ceil(years * 12)

        adjusted_target = inflation_adjust(goal.target_amount, goal.inflation_rate, years)
        progress = calculate_progress(current, adjusted_target)

        # zero-month horizon: nothing left to pay in, nothing left to grow
        if months > 0:
            required_monthly = required_payment(adjusted_target, goal.return_rate, months, current)
            final_value = future_value_annuity(goal.monthly_contribution, goal.return_rate, months, current)
        else:
            required_monthly = 0.0
            final_value = current

        series = generate_projection(
            monthly_contribution=goal.monthly_contribution,
            return_rate=goal.return_rate,
            inflation_rate=goal.inflation_rate,
            target_amount=goal.target_amount,
            current_value=current,
            months=min(months, MAX_SERIES_MONTHS),
        )

        return ProjectionResult(
            currentValue=round_money(current),
            targetAmount=goal.target_amount,
            inflationAdjustedTarget=round_money(adjusted_target),
            progress=round(progress, 2),
            yearsToTarget=years,
            monthsToTarget=months,
            requiredMonthly=round_money(required_monthly),
            finalProjectedValue=round_money(final_value),
            projectionData=series,
            status=determine_goal_status(progress, goal.monthly_contribution, required_monthly),
        )

    def calculate_required_contribution(self, params: RequiredContributionRequest) -> RequiredContributionResult:
        ensure_valid_inputs(
            target_amount=params.targetAmount,
            current_amount=params.currentAmount,
            return_rate=params.returnRate,
            inflation_rate=params.inflationRate,
            years=params.years,
        )

        months = params.years * 12
        adjusted_target = inflation_adjust(params.targetAmount, params.inflationRate, params.years)
        required_monthly = required_payment(adjusted_target, params.returnRate, months, params.currentAmount)

        total_contributions = required_monthly * months
        total_interest = adjusted_target - params.currentAmount - total_contributions

        return RequiredContributionResult(
            requiredMonthly=round_money(required_monthly),
            totalContributions=round_money(total_contributions),
            totalInterest=round_money(total_interest),
            inflationAdjustedTarget=round_money(adjusted_target),
            effectiveRate=params.returnRate,
            months=months,
        )

    def calculate_future_value(self, params: FutureValueRequest) -> FutureValueResult:
        ensure_valid_inputs(
            current_amount=params.currentAmount,
            monthly_contribution=params.monthlyContribution,
            return_rate=params.returnRate,
            inflation_rate=params.inflationRate,
            years=params.years,
        )

        months = params.years * 12
        future_value = future_value_annuity(
            params.monthlyContribution,
            params.returnRate,
            months,
            params.currentAmount,
        )
        total_contributions = params.monthlyContribution * months
        total_interest = future_value - params.currentAmount - total_contributions

        return FutureValueResult(
            futureValue=round_money(future_value),
            totalContributions=round_money(total_contributions),
            totalInterest=round_money(total_interest),
            realValue=round_money(present_value(future_value, params.inflationRate, params.years)),
            effectiveRate=params.returnRate,
            months=months,
        )

    def calculate_break_even(self, params: BreakEvenRequest) -> List[BreakEvenEntry]:
        """
        For each contribution tier, binary-search the fewest months (1..600)
        whose projected value covers the inflation-adjusted target.
        Tiers that never get there within 50 years are left out.
        """
        ensure_valid_inputs(
            target_amount=params.targetAmount,
            current_amount=params.currentAmount,
            return_rate=params.returnRate,
            inflation_rate=params.inflationRate,
        )

        entries: List[BreakEvenEntry] = []
        for contribution in BREAK_EVEN_CONTRIBUTIONS:
            low, high = 1, BREAK_EVEN_MAX_MONTHS
            found = 0

            while low <= high:
                mid = (low + high) // 2
                target = inflation_adjust(params.targetAmount, params.inflationRate, mid / 12)
                projected = future_value_annuity(contribution, params.returnRate, mid, params.currentAmount)

                if projected >= target:
                    found = mid
                    high = mid - 1
                else:
                    low = mid + 1

            if found:
                entries.append(
                    BreakEvenEntry(
                        monthlyContribution=contribution,
                        months=found,
                        years=round(found / 12, 1),
                    )
                )

        return entries

    def compare_scenarios(self, scenarios: Sequence[FutureValueRequest]) -> List[ScenarioComparison]:
        if not MIN_SCENARIOS <= len(scenarios) <= MAX_SCENARIOS:
            raise FinancialInputError(
                [f"between {MIN_SCENARIOS} and {MAX_SCENARIOS} scenarios are required, got {len(scenarios)}"]
            )

        errors: List[str] = []
        results: List[ScenarioComparison] = []
        for index, scenario in enumerate(scenarios):
            try:
                result = self.calculate_future_value(scenario)
            except FinancialInputError as exc:
                errors.extend(f"scenario {index + 1}: {message}" for message in exc.errors)
                continue

            results.append(
                ScenarioComparison(
                    scenarioIndex=index,
                    scenarioName=scenario.name or f"Scenario {index + 1}",
                    inputs=scenario,
                    **result.model_dump(),
                )
            )

        if errors:
            raise FinancialInputError(errors)
        return results

    def calculate_inflation_impact(self, params: InflationImpactRequest) -> InflationImpactResult:
        errors: List[str] = []
        if params.amount <= 0:
            errors.append("amount must be greater than 0")
        try:
            ensure_valid_inputs(inflation_rate=params.inflationRate, years=params.years)
        except FinancialInputError as exc:
            errors.extend(exc.errors)
        if errors:
            raise FinancialInputError(errors)

        future_nominal = inflation_adjust(params.amount, params.inflationRate, params.years)
        real_today = present_value(params.amount, params.inflationRate, params.years)

        return InflationImpactResult(
            originalAmount=params.amount,
            futureNominalValue=round_money(future_nominal),
            realValueToday=round_money(real_today),
            purchasingPowerLoss=round_money(params.amount - real_today),
            inflationImpactPercentage=round((future_nominal - params.amount) / params.amount * 100, 2),
            years=params.years,
            inflationRate=round(params.inflationRate * 100, 4),
        )
