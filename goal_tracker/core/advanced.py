from __future__ import annotations

import math
import random
from datetime import date
from typing import List, Optional, Sequence

from goal_tracker.core.formulas import round_money
from goal_tracker.core.projection import BasicProjectionEngine, years_to_target
from goal_tracker.core.sampling import clamp, make_rng, normal_random
from goal_tracker.models import DEFAULT_STRESS_SCENARIOS, Contribution, Goal, StressScenario, current_value
from goal_tracker.schemas.advanced import (
    Allocation,
    AllocationRequest,
    AllocationResult,
    MonteCarloOptions,
    MonteCarloResult,
    Percentiles,
    StressedProjection,
    StressTestResult,
    TaxAdjustedRequest,
    TaxAdjustedResult,
)

RETURN_RATE_BOUNDS = (-0.5, 0.5)
INFLATION_RATE_BOUNDS = (0.0, 0.2)

# Month-to-month noise on top of the per-trial return draw, 15% annualised.
MONTHLY_VOLATILITY = 0.15 / math.sqrt(12)

ASSET_CLASS_RETURNS = {"stocks": 0.08, "bonds": 0.04, "cash": 0.02}


class AdvancedProjectionEngine:
    """
    Randomised and stressed variants of the basic projection.

    Holds a BasicProjectionEngine instead of extending it. Every Monte Carlo
    call builds its own random.Random, so concurrent calls never share state;
    pass seed to make runs reproducible.
    """

    def __init__(self, basic: Optional[BasicProjectionEngine] = None, seed: Optional[int] = None):
        self.basic = basic or BasicProjectionEngine()
        self.seed = seed

    # ------------------------------------------------------------------
    # Monte Carlo
    # ------------------------------------------------------------------

    def monte_carlo_simulation(
        self,
        goal: Goal,
        contributions: Sequence[Contribution] = (),
        options: Optional[MonteCarloOptions] = None,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
    ) -> MonteCarloResult:
        options = options or MonteCarloOptions()
        rng = rng or make_rng(self.seed)

        start_value = current_value(list(contributions))
        years = years_to_target(goal, today)
        months = math.ceil(years * 12)

        final_values: List[float] = []
        successes = 0

        for _ in range(options.iterations):
            return_rate = clamp(
                normal_random(rng, goal.return_rate, options.returnRateStdDev),
                *RETURN_RATE_BOUNDS,
            )
            inflation_rate = clamp(
                normal_random(rng, goal.inflation_rate, options.inflationRateStdDev),
                *INFLATION_RATE_BOUNDS,
            )

            final_value = simulate_growth_with_volatility(
                rng,
                start_value,
                goal.monthly_contribution,
                return_rate,
                months,
            )
            target = goal.target_amount * (1 + inflation_rate) ** years

            final_values.append(final_value)
            if final_value >= target:
                successes += 1

        final_values.sort()
        n = options.iterations

        return MonteCarloResult(
            successRate=round(successes / n * 100, 2),
            percentiles=Percentiles(
                p10=round_money(final_values[int(n * 0.1)]),
                p50=round_money(final_values[int(n * 0.5)]),
                p90=round_money(final_values[int(n * 0.9)]),
            ),
            averageFinalValue=round_money(sum(final_values) / n),
            iterations=n,
            targetAmount=goal.target_amount,
        )

    # ------------------------------------------------------------------
    # Stress testing
    # ------------------------------------------------------------------

    def stress_test(
        self,
        goal: Goal,
        contributions: Sequence[Contribution] = (),
        scenarios: Optional[Sequence[StressScenario]] = None,
        today: Optional[date] = None,
    ) -> List[StressTestResult]:
        scenarios = list(scenarios) if scenarios else DEFAULT_STRESS_SCENARIOS
        base = self.basic.calculate_goal_projection(goal, contributions, today).finalProjectedValue

        results: List[StressTestResult] = []
        for scenario in scenarios:
            stressed = self.apply_stress_scenario(goal, contributions, scenario, today)
            impact = stressed.finalProjectedValue - base
            results.append(
                StressTestResult(
                    name=scenario.name,
                    scenario=scenario,
                    baseProjection=base,
                    stressedProjection=stressed.finalProjectedValue,
                    impact=round_money(impact),
                    impactPercentage=round(impact / base * 100, 2) if base else 0.0,
                    stillAchievable=stressed.finalProjectedValue >= stressed.inflationAdjustedTarget,
                )
            )
        return results

    def apply_stress_scenario(
        self,
        goal: Goal,
        contributions: Sequence[Contribution],
        scenario: StressScenario,
        today: Optional[date] = None,
    ) -> StressedProjection:
        """
        Same month loop as the basic projection, but each month's return
        (and inflation) rate is resolved against the scenario's window.
        """
        years = years_to_target(goal, today)
        months = math.ceil(years * 12)

        value = current_value(list(contributions))
        shocked_inflation_months = 0
        for month in range(1, months + 1):
            monthly_rate = scenario.return_rate_for(month, goal.return_rate) / 12
            value = value * (1 + monthly_rate) + goal.monthly_contribution
            if scenario.inflation_rate is not None and scenario.is_active(month):
                shocked_inflation_months += 1

        shocked_years = min(shocked_inflation_months / 12, years)
        shocked_inflation = scenario.inflation_rate_for(scenario.start_month, goal.inflation_rate)
        target = (
            goal.target_amount
            * (1 + goal.inflation_rate) ** (years - shocked_years)
            * (1 + shocked_inflation) ** shocked_years
        )

        return StressedProjection(
            finalProjectedValue=round_money(value),
            inflationAdjustedTarget=round_money(target),
            scenario=scenario,
        )

    # ------------------------------------------------------------------
    # Allocation and tax helpers
    # ------------------------------------------------------------------

    def calculate_optimal_allocation(self, params: AllocationRequest) -> AllocationResult:
        """
        Rule-of-thumb allocation ("100 minus age" family), nudged by horizon and
        renormalised so stocks + bonds + cash == 100 exactly.
        """
        age = params.currentAge
        if params.riskTolerance == "conservative":
            stocks, bonds, cash = max(20, 100 - age), 60, 20
        elif params.riskTolerance == "aggressive":
            stocks, bonds, cash = min(90, 120 - age), 10, 0
        else:
            stocks, bonds, cash = max(30, 110 - age), 40, 10

        if params.timeHorizon < 5:
            stocks = max(stocks - 20, 20)
            bonds += 10
            cash += 10
        elif params.timeHorizon > 20:
            stocks = min(stocks + 10, 90)
            bonds = max(bonds - 5, 0)
            cash = max(cash - 5, 0)

        total = stocks + bonds + cash
        stocks_pct = round(stocks / total * 100)
        bonds_pct = round(bonds / total * 100)
        cash_pct = 100 - stocks_pct - bonds_pct

        portfolio_return = (
            stocks_pct / 100 * ASSET_CLASS_RETURNS["stocks"]
            + bonds_pct / 100 * ASSET_CLASS_RETURNS["bonds"]
            + cash_pct / 100 * ASSET_CLASS_RETURNS["cash"]
        )

        return AllocationResult(
            allocation=Allocation(stocks=stocks_pct, bonds=bonds_pct, cash=cash_pct),
            expectedReturn=round(portfolio_return * 100, 2),
            riskLevel=params.riskTolerance,
            timeHorizon=params.timeHorizon,
        )

    def calculate_tax_adjusted_returns(self, params: TaxAdjustedRequest) -> TaxAdjustedResult:
        # tax_deferred is passed through untouched: withdrawal-time tax is not modelled
        if params.accountType == "taxable":
            effective = params.grossReturn * (1 - params.taxRate)
        else:
            effective = params.grossReturn

        return TaxAdjustedResult(
            grossReturn=round(params.grossReturn * 100, 2),
            effectiveReturn=round(effective * 100, 2),
            taxImpact=round((params.grossReturn - effective) * 100, 2),
            accountType=params.accountType,
            years=params.years,
            grossGrowthMultiplier=round((1 + params.grossReturn) ** params.years, 4),
            effectiveGrowthMultiplier=round((1 + effective) ** params.years, 4),
        )


def simulate_growth_with_volatility(
    rng: random.Random,
    initial_value: float,
    monthly_contribution: float,
    annual_return_rate: float,
    months: int,
) -> float:
    """Contribution at the start of each month, then a noisy monthly return. Never below zero."""
    value = initial_value
    monthly_mean = annual_return_rate / 12

    for _ in range(months):
        value += monthly_contribution
        value *= 1 + normal_random(rng, monthly_mean, MONTHLY_VOLATILITY)
        value = max(0.0, value)

    return value
