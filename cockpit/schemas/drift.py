"""Pydantic schemas for drift alerts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DriftAlertOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    scenario_id: UUID | None = None
    alert_type: str
    severity: str
    layer: str
    metric_key: str
    current_value: float | None = None
    threshold: float | None = None
    message: str = ""
    acknowledged: bool = False
    created_at: datetime


class DriftAlertListResponse(BaseModel):
    project_id: str
    scenario_id: str | None = None
    items: list[DriftAlertOut] = Field(default_factory=list)
    total: int = 0


class ClearAlertsResponse(BaseModel):
    scenario_id: str
    removed: int = 0


class AcknowledgeAlertResponse(BaseModel):
    alert_id: str
    acknowledged: bool = True
