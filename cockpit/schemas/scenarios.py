"""Pydantic schemas for scenario listing, role resolution and mutations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ScenarioOut(BaseModel):
    """A project scenario as read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    name: str
    description: str | None = None
    scenario_type: str = "custom"
    is_active: bool = False
    is_recommended: bool = False
    is_archived: bool = False
    pinned: bool = False
    rank_score: float | None = None
    created_at: datetime | None = None


class ScenarioRoleOut(BaseModel):
    """Which scenario fills a comparison role, and why."""

    scenario_id: UUID | None = None
    name: str | None = None
    source: str = Field(..., description="explicit_id, flagged, ranked_fallback or none")


class ScenarioListResponse(BaseModel):
    """Live scenarios of a project plus the resolved Baseline/Active/Recommended roles."""

    project_id: str
    scenarios: list[ScenarioOut] = Field(default_factory=list)
    baseline: ScenarioRoleOut
    active: ScenarioRoleOut
    recommended: ScenarioRoleOut


class ProjectionRequest(BaseModel):
    months: int | None = Field(None, ge=1, le=120, description="Projection horizon in months")
    assumptions: dict[str, float] | None = Field(
        None, description="inflation_rate, schedule_slip_risk, platform_appetite_decay"
    )


class StressTestRequest(BaseModel):
    months: int | None = Field(None, ge=1, le=120)


class ComputeResultResponse(BaseModel):
    """Opaque result of a remote compute function call."""

    function: str
    action: str
    result: dict = Field(default_factory=dict)


class ScenarioMutationResponse(BaseModel):
    scenario: ScenarioOut
    invalidated: int = Field(0, description="Number of cache entries invalidated")
