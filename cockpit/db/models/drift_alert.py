"""DriftAlert model: deviations of live metrics from a scenario's plan."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String, Text, Uuid

from cockpit.db.base import Base


class DriftAlert(Base):
    __tablename__ = "drift_alerts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, nullable=False, index=True)
    scenario_id = Column(Uuid, ForeignKey("project_scenarios.id"), nullable=True, index=True)

    alert_type = Column(String(50), nullable=False, default="threshold")
    severity = Column(String(20), nullable=False)  # info, warning, critical
    layer = Column(String(50), nullable=False)  # creative, execution, production, finance, revenue
    metric_key = Column(String(100), nullable=False)
    current_value = Column(Float, nullable=True)
    threshold = Column(Float, nullable=True)
    message = Column(Text, nullable=False, default="")

    acknowledged = Column(Boolean, nullable=False, default=False, index=True)
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
