"""Contracts for Monte Carlo, stress testing, allocation and tax adjustment."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from goal_tracker.models import Contribution, Goal, StressScenario

RiskTolerance = Literal["conservative", "moderate", "aggressive"]
AccountType = Literal["taxable", "tax_deferred", "tax_free"]


class MonteCarloOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    iterations: int = Field(1000, ge=1, le=10000)
    returnRateStdDev: float = Field(0.15, ge=0, le=0.5)
    inflationRateStdDev: float = Field(0.01, ge=0, le=0.2)


class MonteCarloRequest(BaseModel):
    goal: Goal
    contributions: List[Contribution] = Field(default_factory=list)
    options: Optional[MonteCarloOptions] = None


class Percentiles(BaseModel):
    p10: float
    p50: float
    p90: float


class MonteCarloResult(BaseModel):
    successRate: float = Field(..., ge=0, le=100)
    percentiles: Percentiles
    averageFinalValue: float
    iterations: int
    targetAmount: float


class StressTestRequest(BaseModel):
    goal: Goal
    contributions: List[Contribution] = Field(default_factory=list)
    scenarios: List[StressScenario] = Field(default_factory=list)


class StressedProjection(BaseModel):
    finalProjectedValue: float
    inflationAdjustedTarget: float
    scenario: StressScenario


class StressTestResult(BaseModel):
    name: str
    scenario: StressScenario
    baseProjection: float
    stressedProjection: float
    impact: float
    impactPercentage: float
    stillAchievable: bool


class AllocationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    riskTolerance: RiskTolerance = "moderate"
    timeHorizon: float = Field(..., gt=0, le=50)
    currentAge: int = Field(..., ge=18, le=100)
    targetAmount: float = Field(..., gt=0)
    currentAmount: float = Field(0.0, ge=0)


class Allocation(BaseModel):
    stocks: int
    bonds: int
    cash: int


class AllocationResult(BaseModel):
    allocation: Allocation
    expectedReturn: float = Field(..., description="Expected annual portfolio return as a percentage.")
    riskLevel: RiskTolerance
    timeHorizon: float
    rebalanceFrequency: str = "quarterly"


class TaxAdjustedRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    grossReturn: float = Field(..., ge=0, le=0.5)
    taxRate: float = Field(0.25, ge=0, le=0.5)
    accountType: AccountType = "taxable"
    years: float = Field(..., gt=0, le=50)


class TaxAdjustedResult(BaseModel):
    grossReturn: float
    effectiveReturn: float
    taxImpact: float
    accountType: AccountType
    years: float
    grossGrowthMultiplier: float
    effectiveGrowthMultiplier: float
