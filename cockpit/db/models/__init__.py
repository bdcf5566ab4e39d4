"""Re-export all models so Base.metadata sees them."""

from cockpit.db.models.decision_event import ScenarioDecisionEvent
from cockpit.db.models.drift_alert import DriftAlert
from cockpit.db.models.projection import ScenarioProjection
from cockpit.db.models.recommendation import ScenarioRecommendation
from cockpit.db.models.scenario import ProjectScenario
from cockpit.db.models.stress_test import ScenarioStressTest

__all__ = [
    "DriftAlert",
    "ProjectScenario",
    "ScenarioDecisionEvent",
    "ScenarioProjection",
    "ScenarioRecommendation",
    "ScenarioStressTest",
]
