"""ScenarioProjection model: forward financial/schedule forecasts."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, Uuid

from cockpit.db.base import Base, JSONType


class ScenarioProjection(Base):
    __tablename__ = "scenario_projections"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, nullable=False, index=True)
    scenario_id = Column(Uuid, ForeignKey("project_scenarios.id"), nullable=False, index=True)

    months = Column(Integer, nullable=True)
    assumptions = Column(JSONType, nullable=False, default=dict)
    series = Column(JSONType, nullable=False, default=list)  # period snapshots, last one carries "budget"
    summary = Column(JSONType, nullable=False, default=list)  # human-readable bullets
    projection_risk_score = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
