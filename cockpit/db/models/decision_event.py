"""ScenarioDecisionEvent model: append-only decision log."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Uuid

from cockpit.db.base import Base, JSONType


class ScenarioDecisionEvent(Base):
    __tablename__ = "scenario_decision_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, nullable=False, index=True)

    event_type = Column(String(50), nullable=False)
    # No foreign keys: referenced scenarios may have been archived or removed upstream
    scenario_id = Column(Uuid, nullable=True)
    previous_scenario_id = Column(Uuid, nullable=True)
    payload = Column(JSONType, nullable=False, default=dict)  # shape depends on event_type
    created_by = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    # NO updated_at -- events are immutable (append-only)
