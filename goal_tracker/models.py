from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

ContributionType = Literal["monthly", "extra", "initial"]


class Goal(BaseModel):
    """Savings goal as stored by the goals service. Never mutated by the engine."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    target_amount: float = Field(gt=0)
    target_date: Optional[date] = None
    target_years: Optional[float] = Field(default=None, gt=0, le=50)
    monthly_contribution: float = Field(default=0.0, ge=0)
    inflation_rate: float = Field(default=0.02, ge=0, le=0.2)
    return_rate: float = Field(default=0.05, ge=0, le=0.3)


class Contribution(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    amount: float = Field(gt=0)
    contribution_date: date
    type: ContributionType = "extra"
    notes: Optional[str] = None


class StressScenario(BaseModel):
    """
    Time-boxed shock. While start_month <= month < start_month + duration_months
    the override rates replace the goal's own; outside the window nothing changes.
    A rate left as None means "use the goal's rate" for that month too.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    return_rate: Optional[float] = Field(default=None, ge=-1, le=1)
    inflation_rate: Optional[float] = Field(default=None, ge=-0.5, le=1)
    start_month: int = Field(ge=1)
    duration_months: int = Field(ge=1)

    @model_validator(mode="after")
    def ensure_shock(self) -> "StressScenario":
        if self.return_rate is None and self.inflation_rate is None:
            raise ValueError("stress scenario needs a return_rate or inflation_rate override")
        return self

    @property
    def end_month(self) -> int:
        """First month after the shock window."""
        return self.start_month + self.duration_months

    def is_active(self, month: int) -> bool:
        return self.start_month <= month < self.end_month

    def return_rate_for(self, month: int, base_rate: float) -> float:
        if self.return_rate is not None and self.is_active(month):
            return self.return_rate
        return base_rate

    def inflation_rate_for(self, month: int, base_rate: float) -> float:
        if self.inflation_rate is not None and self.is_active(month):
            return self.inflation_rate
        return base_rate


DEFAULT_STRESS_SCENARIOS: List[StressScenario] = [
    StressScenario(name="Moderate recession", return_rate=-0.10, start_month=12, duration_months=12),
    StressScenario(name="Severe crisis", return_rate=-0.30, start_month=24, duration_months=24),
    StressScenario(name="High inflation", inflation_rate=0.08, start_month=6, duration_months=36),
    StressScenario(
        name="Stagflation",
        return_rate=-0.05,
        inflation_rate=0.06,
        start_month=18,
        duration_months=18,
    ),
]


def current_value(contributions: List[Contribution]) -> float:
    """Accumulated value is the ledger total; it is never tracked separately."""
    return float(sum(c.amount for c in contributions))
