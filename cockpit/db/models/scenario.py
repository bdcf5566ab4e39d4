"""ProjectScenario model: named branches of planning assumptions."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, String, Text, Uuid

from cockpit.db.base import Base, JSONType


class ProjectScenario(Base):
    __tablename__ = "project_scenarios"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    scenario_type = Column(String(50), nullable=False, default="custom")  # "baseline", "custom", "system", "branch"

    is_active = Column(Boolean, nullable=False, default=False)
    is_recommended = Column(Boolean, nullable=False, default=False)
    is_archived = Column(Boolean, nullable=False, default=False)
    pinned = Column(Boolean, nullable=False, default=False)

    # Null until the ranking pass has scored this scenario
    rank_score = Column(Float, nullable=True)
    ranked_at = Column(DateTime(timezone=True), nullable=True)

    state_overrides = Column(JSONType, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
