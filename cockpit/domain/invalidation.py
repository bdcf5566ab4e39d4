"""Query cache keys and the invalidation registry.

Pure domain functions: every mutation kind maps to the exact set of cached
reads it makes stale, so call sites never assemble key lists by hand.
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

KEY_PREFIX = "cockpit:query"


class CacheFamily(StrEnum):
    SCENARIOS = "scenarios"
    DRIFT_ALERTS = "drift-alerts"
    COMPARISON_PROJECTION = "comparison-projection"
    COMPARISON_STRESS = "comparison-stress"
    COMPARISON_DRIFT = "comparison-drift"
    DECISION_EVENTS = "decision-events"
    SCENARIO_RECOMMENDATION = "scenario-recommendation"


class MutationKind(StrEnum):
    SET_ACTIVE = "set_active"
    TOGGLE_PIN = "toggle_pin"
    ARCHIVE = "archive"
    ACKNOWLEDGE_ALERT = "acknowledge_alert"
    CLEAR_ALERTS = "clear_alerts"
    PROJECT_FORWARD = "project_forward"
    STRESS_TEST = "stress_test"
    BRANCH = "branch"
    RECOMPUTE_RECOMMENDATION = "recompute_recommendation"
    RANK_SCENARIOS = "rank_scenarios"


@dataclass(frozen=True)
class CacheKey:
    """A cached read.

    With scenario_id None the key covers the whole project family: exact
    project-level reads plus every scenario-scoped read underneath.
    """

    family: CacheFamily
    project_id: str
    scenario_id: str | None = None

    @classmethod
    def of(cls, family: CacheFamily, project_id: UUID | str, scenario_id: UUID | str | None = None) -> "CacheKey":
        return cls(family, str(project_id), str(scenario_id) if scenario_id is not None else None)

    @property
    def is_project_wide(self) -> bool:
        return self.scenario_id is None

    def render(self) -> str:
        base = f"{KEY_PREFIX}:{self.family.value}:{self.project_id}"
        if self.scenario_id is None:
            return base
        return f"{base}:{self.scenario_id}"

    def render_pattern(self) -> str:
        """Glob pattern matching every scenario-scoped key of a project-wide key."""
        return f"{self.render()}:*"

    def generation_key(self) -> str:
        """Counter bumped on every invalidation touching this project."""
        return f"{KEY_PREFIX}-gen:{self.project_id}"


def _per_scenario(project_id: UUID | str, scenario_id: UUID | str | None, *families: CacheFamily) -> set[CacheKey]:
    # Without a scenario the whole family for the project goes stale
    return {CacheKey.of(family, project_id, scenario_id) for family in families}


def invalidation_keys(
    kind: MutationKind,
    project_id: UUID | str,
    scenario_id: UUID | str | None = None,
) -> frozenset[CacheKey]:
    """Cache keys a mutation must invalidate before the view is consistent again.

    Rules:
        - set_active / recompute_recommendation / branch: roles can move to
          any scenario, so every project-wide read goes
        - toggle_pin / archive: the scenario list plus the decision log
          (names and actionability depend on the live set)
        - acknowledge_alert / clear_alerts: the drift panel and the
          comparison drift counts for the scenario
        - project_forward / stress_test: the scenario's comparison reads and
          the decision log (a completion event gets appended)
        - rank_scenarios: the scenario list (rank_score) and the stored
          recommendation the ranked fallback competes with
    """
    keys: set[CacheKey] = set()

    if kind in (MutationKind.SET_ACTIVE, MutationKind.RECOMPUTE_RECOMMENDATION, MutationKind.BRANCH):
        keys |= {CacheKey.of(family, project_id) for family in CacheFamily}

    elif kind in (MutationKind.TOGGLE_PIN, MutationKind.ARCHIVE):
        keys |= {
            CacheKey.of(CacheFamily.SCENARIOS, project_id),
            CacheKey.of(CacheFamily.DECISION_EVENTS, project_id),
            CacheKey.of(CacheFamily.SCENARIO_RECOMMENDATION, project_id),
        }

    elif kind in (MutationKind.ACKNOWLEDGE_ALERT, MutationKind.CLEAR_ALERTS):
        # The standalone panel may be scoped to this scenario or unscoped
        keys.add(CacheKey.of(CacheFamily.DRIFT_ALERTS, project_id))
        keys |= _per_scenario(project_id, scenario_id, CacheFamily.COMPARISON_DRIFT)

    elif kind == MutationKind.RANK_SCENARIOS:
        keys |= {
            CacheKey.of(CacheFamily.SCENARIOS, project_id),
            CacheKey.of(CacheFamily.SCENARIO_RECOMMENDATION, project_id),
        }

    elif kind == MutationKind.PROJECT_FORWARD:
        keys |= _per_scenario(project_id, scenario_id, CacheFamily.COMPARISON_PROJECTION)
        keys.add(CacheKey.of(CacheFamily.DECISION_EVENTS, project_id))
        keys.add(CacheKey.of(CacheFamily.SCENARIOS, project_id))

    elif kind == MutationKind.STRESS_TEST:
        keys |= _per_scenario(project_id, scenario_id, CacheFamily.COMPARISON_STRESS)
        keys.add(CacheKey.of(CacheFamily.DECISION_EVENTS, project_id))

    else:
        raise ValueError(f"Unknown mutation kind: {kind}")

    return frozenset(keys)
