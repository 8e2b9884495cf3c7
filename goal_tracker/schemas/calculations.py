"""
Contracts for the standalone calculators.

Requests only carry types and defaults; value ranges are checked by
goal_tracker.domain.validation so every violation is reported together.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequiredContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: float
    currentAmount: float = 0.0
    years: float
    returnRate: float
    inflationRate: float = 0.02


class RequiredContributionResult(BaseModel):
    requiredMonthly: float
    totalContributions: float
    totalInterest: float
    inflationAdjustedTarget: float
    effectiveRate: float
    months: float


class FutureValueRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    monthlyContribution: float
    currentAmount: float = 0.0
    years: float
    returnRate: float
    inflationRate: float = 0.02


class FutureValueResult(BaseModel):
    futureValue: float
    totalContributions: float
    totalInterest: float
    realValue: float = Field(..., description="Future value expressed in today's money.")
    effectiveRate: float
    months: float


class ScenarioComparison(FutureValueResult):
    scenarioIndex: int
    scenarioName: str
    inputs: FutureValueRequest


class CompareScenariosRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scenarios: List[FutureValueRequest]


class BreakEvenRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: float
    currentAmount: float = 0.0
    returnRate: float
    inflationRate: float = 0.02


class BreakEvenEntry(BaseModel):
    monthlyContribution: float
    months: int = Field(..., ge=1, le=600)
    years: float


class InflationImpactRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float
    years: float
    inflationRate: float = 0.02


class InflationImpactResult(BaseModel):
    originalAmount: float
    futureNominalValue: float
    realValueToday: float
    purchasingPowerLoss: float
    inflationImpactPercentage: float
    years: float
    inflationRate: float = Field(..., description="Annual inflation as a percentage.")
