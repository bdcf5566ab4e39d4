"""Pydantic schemas for the decision log."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DecisionEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    event_type: str
    scenario_id: UUID | None = None
    previous_scenario_id: UUID | None = None
    payload: dict[str, Any] | None = None
    created_by: str | None = None
    created_at: datetime


class EventActionOut(BaseModel):
    kind: Literal["set_active", "project", "stress_test", "branch"]
    label: str
    scenario_id: UUID | None = None
    event_id: UUID | None = None
    months: int | None = None
    requires_confirmation: bool = False


class DecisionLogEntry(BaseModel):
    event: DecisionEventOut
    label: str
    variant: Literal["default", "secondary", "destructive", "outline"]
    actions: list[EventActionOut] = Field(default_factory=list)
    change_reasons: list[str] = Field(default_factory=list)
    domain: str | None = None
    scenario_name: str
    previous_scenario_name: str | None = None


class DecisionLogResponse(BaseModel):
    """Newest-first decision log. items defaults to empty array, never null."""

    project_id: str
    items: list[DecisionLogEntry] = Field(default_factory=list)
    total: int = 0


class BranchRequest(BaseModel):
    confirmed: bool = Field(False, description="Branch creation must be explicitly confirmed")
