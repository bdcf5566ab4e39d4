"""ScenarioRecommendation model: output of the ranking pass."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Uuid

from cockpit.db.base import Base, JSONType


class ScenarioRecommendation(Base):
    __tablename__ = "scenario_recommendations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, nullable=False, index=True)
    recommended_scenario_id = Column(Uuid, nullable=False)

    confidence = Column(Float, nullable=False, default=0.0)
    reasons = Column(JSONType, nullable=False, default=list)
    tradeoffs = Column(JSONType, nullable=False, default=dict)
    risk_flags = Column(JSONType, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
