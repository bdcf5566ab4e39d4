"""Decision log presentation.

Pure domain functions mapping each decision event to its badge label,
badge variant and the follow-up actions it offers. No DB access.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from uuid import UUID

from cockpit.domain.scenarios import find_scenario, scenario_display_name
from cockpit.schemas.decision_log import DecisionEventOut
from cockpit.schemas.scenarios import ScenarioOut

DEFAULT_ACTION_MONTHS = 12


class EventType(StrEnum):
    RECOMMENDATION_COMPUTED = "recommendation_computed"
    ACTIVE_SCENARIO_CHANGED = "active_scenario_changed"
    PROJECTION_COMPLETED = "projection_completed"
    STRESS_TEST_COMPLETED = "stress_test_completed"
    BRANCH_CREATED = "branch_created"
    SCENARIO_MERGED = "scenario_merged"
    SCENARIO_LOCK_CHANGED = "scenario_lock_changed"
    GOVERNANCE_SCANNED = "governance_scanned"
    MERGE_RISK_EVALUATED = "merge_risk_evaluated"
    MERGE_APPROVAL_REQUESTED = "merge_approval_requested"
    MERGE_APPROVAL_DECIDED = "merge_approval_decided"
    GOVERNANCE_POLICY_ESCALATED = "governance_policy_escalated"
    GOVERNANCE_MEMORY_UPDATED = "governance_memory_updated"
    MERGE_APPROVAL_CONSUMED = "merge_approval_consumed"
    MERGE_APPLIED_FROM_APPROVAL = "merge_applied_from_approval"
    MERGE_APPLY_ATTEMPTED = "merge_apply_attempted"
    APPROVAL_PENDING_BLOCKED = "approval_pending_blocked"


class BadgeVariant(StrEnum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"


class ActionKind(StrEnum):
    SET_ACTIVE = "set_active"
    PROJECT = "project"
    STRESS_TEST = "stress_test"
    BRANCH = "branch"


@dataclass(frozen=True)
class EventAction:
    kind: ActionKind
    label: str
    scenario_id: UUID | None = None
    event_id: UUID | None = None
    months: int | None = None
    requires_confirmation: bool = False


@dataclass(frozen=True)
class EventPresentation:
    label: str
    variant: BadgeVariant
    actions: list[EventAction] = field(default_factory=list)
    change_reasons: list[str] = field(default_factory=list)
    domain: str | None = None
    scenario_name: str = "—"
    previous_scenario_name: str | None = None


@dataclass(frozen=True)
class _EventSpec:
    label: str
    variant: BadgeVariant


_SPECS: dict[EventType, _EventSpec] = {
    EventType.RECOMMENDATION_COMPUTED: _EventSpec("Recommendation", BadgeVariant.DEFAULT),
    EventType.ACTIVE_SCENARIO_CHANGED: _EventSpec("Active Changed", BadgeVariant.SECONDARY),
    EventType.PROJECTION_COMPLETED: _EventSpec("Projection", BadgeVariant.OUTLINE),
    EventType.STRESS_TEST_COMPLETED: _EventSpec("Stress Test", BadgeVariant.OUTLINE),
    EventType.BRANCH_CREATED: _EventSpec("Branch Created", BadgeVariant.SECONDARY),
    EventType.SCENARIO_MERGED: _EventSpec("Merged", BadgeVariant.SECONDARY),
    EventType.SCENARIO_LOCK_CHANGED: _EventSpec("Lock Changed", BadgeVariant.OUTLINE),
    EventType.GOVERNANCE_SCANNED: _EventSpec("Governance Scan", BadgeVariant.OUTLINE),
    EventType.MERGE_RISK_EVALUATED: _EventSpec("Risk Evaluated", BadgeVariant.SECONDARY),
    EventType.MERGE_APPROVAL_REQUESTED: _EventSpec("Approval Requested", BadgeVariant.DESTRUCTIVE),
    EventType.MERGE_APPROVAL_DECIDED: _EventSpec("Approval Decided", BadgeVariant.DEFAULT),
    EventType.GOVERNANCE_POLICY_ESCALATED: _EventSpec("Policy Escalated", BadgeVariant.DESTRUCTIVE),
    EventType.GOVERNANCE_MEMORY_UPDATED: _EventSpec("Gov Memory Updated", BadgeVariant.OUTLINE),
    EventType.MERGE_APPROVAL_CONSUMED: _EventSpec("Approval Used", BadgeVariant.OUTLINE),
    EventType.MERGE_APPLIED_FROM_APPROVAL: _EventSpec("Applied (Approval)", BadgeVariant.SECONDARY),
    EventType.MERGE_APPLY_ATTEMPTED: _EventSpec("Apply Attempted", BadgeVariant.OUTLINE),
    EventType.APPROVAL_PENDING_BLOCKED: _EventSpec("Approval Blocked", BadgeVariant.DESTRUCTIVE),
}


def parse_event_type(raw: str) -> EventType | None:
    """Map a stored event_type string to EventType, None for unknown types."""
    try:
        return EventType(raw)
    except ValueError:
        return None


def _badge(event_type: EventType | None, raw_type: str, payload: dict[str, Any]) -> tuple[str, BadgeVariant]:
    if event_type is None:
        return raw_type, BadgeVariant.OUTLINE
    if event_type == EventType.MERGE_APPROVAL_DECIDED:
        if payload.get("approved"):
            return "Approved", BadgeVariant.DEFAULT
        return "Rejected", BadgeVariant.DESTRUCTIVE
    spec = _SPECS[event_type]
    return spec.label, spec.variant


def _set_active(scenario_id: UUID) -> EventAction:
    return EventAction(kind=ActionKind.SET_ACTIVE, label="Set Active", scenario_id=scenario_id)


def _project(scenario_id: UUID, label: str = "Project") -> EventAction:
    return EventAction(
        kind=ActionKind.PROJECT, label=label, scenario_id=scenario_id, months=DEFAULT_ACTION_MONTHS
    )


def _stress(scenario_id: UUID, label: str = "Stress") -> EventAction:
    return EventAction(
        kind=ActionKind.STRESS_TEST, label=label, scenario_id=scenario_id, months=DEFAULT_ACTION_MONTHS
    )


def available_actions(
    event_type: EventType | None,
    event_id: UUID,
    scenario_id: UUID | None,
) -> list[EventAction]:
    """Follow-up actions for an event.

    Args:
        event_type: Parsed event type (None for unknown types)
        event_id: Id of the event (needed for branching)
        scenario_id: The event's scenario id if it resolves to a live scenario, else None

    Rules:
        - recommendation_computed: Set Active, Project, Stress (scenario needed) + Branch (always)
        - active_scenario_changed: Set Active
        - projection_completed: Project Again
        - stress_test_completed: Stress Again
        - anything else: log-only
    """
    if event_type == EventType.RECOMMENDATION_COMPUTED:
        actions: list[EventAction] = []
        if scenario_id is not None:
            actions += [_set_active(scenario_id), _project(scenario_id), _stress(scenario_id)]
        actions.append(EventAction(
            kind=ActionKind.BRANCH,
            label="Branch",
            event_id=event_id,
            requires_confirmation=True,
        ))
        return actions

    if scenario_id is None:
        return []

    if event_type == EventType.ACTIVE_SCENARIO_CHANGED:
        return [_set_active(scenario_id)]

    if event_type == EventType.PROJECTION_COMPLETED:
        return [_project(scenario_id, "Project Again")]

    if event_type == EventType.STRESS_TEST_COMPLETED:
        return [_stress(scenario_id, "Stress Again")]

    return []


def humanize_reasons(reasons: Any) -> list[str]:
    """'budget_drift_reduced' -> 'budget drift reduced'; non-string entries dropped."""
    if not isinstance(reasons, list):
        return []
    return [r.replace("_", " ") for r in reasons if isinstance(r, str)]


def present_event(event: DecisionEventOut, scenarios: Sequence[ScenarioOut]) -> EventPresentation:
    """Build the full presentation of one decision event.

    Pure function -- unknown event types and dangling scenario references
    degrade gracefully instead of raising.
    """
    payload = event.payload if isinstance(event.payload, dict) else {}
    event_type = parse_event_type(event.event_type)
    label, variant = _badge(event_type, event.event_type, payload)

    resolvable = find_scenario(scenarios, event.scenario_id)
    actions = available_actions(
        event_type,
        event.id,
        resolvable.id if resolvable is not None else None,
    )

    change_reasons: list[str] = []
    if event_type == EventType.RECOMMENDATION_COMPUTED:
        change_reasons = humanize_reasons(payload.get("change_reasons"))

    domain = payload.get("domain")
    previous_name = None
    if event.previous_scenario_id is not None and event.previous_scenario_id != event.scenario_id:
        previous_name = scenario_display_name(event.previous_scenario_id, scenarios)

    return EventPresentation(
        label=label,
        variant=variant,
        actions=actions,
        change_reasons=change_reasons,
        domain=domain if isinstance(domain, str) and domain else None,
        scenario_name=scenario_display_name(event.scenario_id, scenarios),
        previous_scenario_name=previous_name,
    )
