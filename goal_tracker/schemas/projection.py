"""Data contracts for goal projections."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from goal_tracker.models import Contribution, Goal

StatusName = Literal["completed", "on_track", "close", "behind"]


class ProjectionPoint(BaseModel):
    """Single month of a projection series."""

    month: int = Field(..., ge=1)
    value: float
    target: float
    progress: float = Field(..., ge=0, le=100)


class GoalStatus(BaseModel):
    status: StatusName
    message: str
    color: Literal["green", "yellow", "red"]
    priority: Literal["low", "medium", "high"]
    deficit: Optional[float] = Field(
        None,
        description="Extra monthly amount needed; only set when behind.",
    )


class ProjectionResult(BaseModel):
    """Full projection for one goal, recomputed on every request."""

    currentValue: float
    targetAmount: float
    inflationAdjustedTarget: float
    progress: float = Field(..., ge=0, le=100)
    yearsToTarget: float
    monthsToTarget: int
    requiredMonthly: float
    finalProjectedValue: float
    projectionData: List[ProjectionPoint]
    status: GoalStatus


class GoalRequest(BaseModel):
    """Goal record plus its contribution ledger, as handed over by the goals service."""

    goal: Goal
    contributions: List[Contribution] = Field(default_factory=list)
