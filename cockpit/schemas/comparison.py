"""Pydantic schemas for the scenario comparison view."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from cockpit.schemas.scenarios import ScenarioOut


class ProjectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scenario_id: UUID
    months: int | None = None
    summary: list = Field(default_factory=list)
    series: list = Field(default_factory=list)
    projection_risk_score: float | None = None
    created_at: datetime | None = None


class StressTestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scenario_id: UUID
    fragility_score: float
    volatility_index: float
    created_at: datetime | None = None


class DriftCounts(BaseModel):
    """Unacknowledged drift alerts for one scenario, partitioned by severity."""

    critical: int = 0
    warning: int = 0
    info: int = 0


class MetricsOut(BaseModel):
    irr: float | None = None
    npv: float | None = None
    payback_months: int | None = None
    schedule_months: int | None = None
    budget: float | None = None
    risk_score: float | None = None


class ScenarioCard(BaseModel):
    """One comparison slot, ready to render."""

    scenario: ScenarioOut
    tags: list[str] = Field(default_factory=list)
    is_active: bool = False
    metrics: MetricsOut | None = None
    stress: StressTestOut | None = None
    drift: DriftCounts = Field(default_factory=DriftCounts)
    display: dict[str, str] = Field(default_factory=dict, description="Formatted metric strings, '—' when absent")
    error: str | None = Field(None, description="Set when this slot's fetches failed; no partial metrics are returned")


class DeltaItem(BaseModel):
    label: str
    value: float | None = None
    display: str


class ComparisonResponse(BaseModel):
    """Scenario comparison payload.

    deltas is empty (never null) when Baseline and Recommended do not resolve
    to two different slots.
    """

    project_id: str
    cards: list[ScenarioCard] = Field(default_factory=list)
    deltas: list[DeltaItem] = Field(default_factory=list)
    has_delta: bool = False
