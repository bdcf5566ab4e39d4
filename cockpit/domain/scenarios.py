"""Scenario role resolution.

Pure domain functions selecting the Baseline, Active and Recommended
scenarios of a project. No DB access, fully deterministic.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from cockpit.schemas.scenarios import ScenarioOut

BASELINE_TYPE = "baseline"
ABSENT = "—"


class ResolutionSource(StrEnum):
    """Why a scenario was chosen for a role."""

    EXPLICIT_ID = "explicit_id"
    FLAGGED = "flagged"
    RANKED_FALLBACK = "ranked_fallback"
    NONE = "none"


@dataclass(frozen=True)
class ScenarioResolution:
    """Result of resolving a comparison role."""

    scenario: ScenarioOut | None
    source: ResolutionSource

    @property
    def scenario_id(self) -> UUID | None:
        return self.scenario.id if self.scenario is not None else None


_UNRESOLVED = ScenarioResolution(scenario=None, source=ResolutionSource.NONE)


def live_scenarios(scenarios: Iterable[ScenarioOut]) -> list[ScenarioOut]:
    """Drop archived scenarios, preserving order."""
    return [s for s in scenarios if not s.is_archived]


def _find_live(scenarios: Sequence[ScenarioOut], scenario_id: UUID | str | None) -> ScenarioOut | None:
    if scenario_id is None:
        return None
    wanted = str(scenario_id)
    for scenario in scenarios:
        if str(scenario.id) == wanted and not scenario.is_archived:
            return scenario
    return None


def resolve_baseline(
    scenarios: Sequence[ScenarioOut],
    baseline_scenario_id: UUID | str | None = None,
) -> ScenarioResolution:
    """Resolve the Baseline role.

    Rules (first match wins):
        - explicit id, if it points at a live scenario
        - first live scenario typed "baseline"
    """
    explicit = _find_live(scenarios, baseline_scenario_id)
    if explicit is not None:
        return ScenarioResolution(explicit, ResolutionSource.EXPLICIT_ID)

    for scenario in live_scenarios(scenarios):
        if scenario.scenario_type == BASELINE_TYPE:
            return ScenarioResolution(scenario, ResolutionSource.FLAGGED)

    return _UNRESOLVED


def resolve_active(
    scenarios: Sequence[ScenarioOut],
    active_scenario_id: UUID | str | None = None,
) -> ScenarioResolution:
    """Resolve the Active role.

    If the store holds several scenarios flagged is_active, the first one in
    iteration order wins.
    """
    explicit = _find_live(scenarios, active_scenario_id)
    if explicit is not None:
        return ScenarioResolution(explicit, ResolutionSource.EXPLICIT_ID)

    for scenario in live_scenarios(scenarios):
        if scenario.is_active:
            return ScenarioResolution(scenario, ResolutionSource.FLAGGED)

    return _UNRESOLVED


def resolve_recommended(
    scenarios: Sequence[ScenarioOut],
    recommended_scenario_id: UUID | str | None = None,
) -> ScenarioResolution:
    """Resolve the Recommended role.

    Rules (first match wins):
        - explicit id, if it points at a live scenario
        - first live scenario flagged is_recommended
        - highest rank_score among live, non-baseline scenarios; scenarios
          without a rank_score are left out rather than counted as zero
    """
    explicit = _find_live(scenarios, recommended_scenario_id)
    if explicit is not None:
        return ScenarioResolution(explicit, ResolutionSource.EXPLICIT_ID)

    live = live_scenarios(scenarios)
    for scenario in live:
        if scenario.is_recommended:
            return ScenarioResolution(scenario, ResolutionSource.FLAGGED)

    ranked = [s for s in live if s.scenario_type != BASELINE_TYPE and s.rank_score is not None]
    if ranked:
        # max() keeps the first of equal scores, matching a stable descending sort
        best = max(ranked, key=lambda s: s.rank_score)
        return ScenarioResolution(best, ResolutionSource.RANKED_FALLBACK)

    return _UNRESOLVED


def find_scenario(scenarios: Sequence[ScenarioOut], scenario_id: UUID | str | None) -> ScenarioOut | None:
    """Return the live scenario with this id, or None."""
    return _find_live(scenarios, scenario_id)


def scenario_display_name(scenario_id: UUID | str | None, scenarios: Sequence[ScenarioOut]) -> str:
    """Name of a referenced scenario, degrading to a truncated id when it is missing."""
    if scenario_id is None:
        return ABSENT
    wanted = str(scenario_id)
    for scenario in scenarios:
        if str(scenario.id) == wanted:
            return scenario.name
    return wanted[:8]
