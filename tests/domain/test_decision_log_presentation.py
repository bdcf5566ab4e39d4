"""Tests for decision log badges, actions and presentation."""
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from cockpit.domain.decision_log import (
    ActionKind,
    BadgeVariant,
    EventType,
    available_actions,
    humanize_reasons,
    parse_event_type,
    present_event,
)
from cockpit.schemas.decision_log import DecisionEventOut
from cockpit.schemas.scenarios import ScenarioOut

pytestmark = pytest.mark.unit

PROJECT_ID = uuid4()


def make_scenario(name: str, **fields) -> ScenarioOut:
    return ScenarioOut(id=uuid4(), project_id=PROJECT_ID, name=name, **fields)


def make_event(event_type: str, scenario_id=None, **fields) -> DecisionEventOut:
    return DecisionEventOut(
        id=uuid4(),
        project_id=PROJECT_ID,
        event_type=event_type,
        scenario_id=scenario_id,
        created_at=datetime.now(timezone.utc),
        **fields,
    )


def test_parse_event_type_unknown_is_none():
    assert parse_event_type("recommendation_computed") == EventType.RECOMMENDATION_COMPUTED
    assert parse_event_type("something_new") is None


def test_recommendation_offers_all_actions_with_branch_last():
    scenario_id, event_id = uuid4(), uuid4()
    actions = available_actions(EventType.RECOMMENDATION_COMPUTED, event_id, scenario_id)
    assert [a.kind for a in actions] == [
        ActionKind.SET_ACTIVE,
        ActionKind.PROJECT,
        ActionKind.STRESS_TEST,
        ActionKind.BRANCH,
    ]
    assert actions[1].months == 12
    assert actions[2].months == 12
    assert actions[3].event_id == event_id
    assert actions[3].requires_confirmation is True


def test_recommendation_without_scenario_still_branches():
    actions = available_actions(EventType.RECOMMENDATION_COMPUTED, uuid4(), None)
    assert [a.kind for a in actions] == [ActionKind.BRANCH]


@pytest.mark.parametrize(
    "event_type, kind, label",
    [
        (EventType.ACTIVE_SCENARIO_CHANGED, ActionKind.SET_ACTIVE, "Set Active"),
        (EventType.PROJECTION_COMPLETED, ActionKind.PROJECT, "Project Again"),
        (EventType.STRESS_TEST_COMPLETED, ActionKind.STRESS_TEST, "Stress Again"),
    ],
)
def test_single_action_events(event_type, kind, label):
    scenario_id = uuid4()
    actions = available_actions(event_type, uuid4(), scenario_id)
    assert len(actions) == 1
    assert actions[0].kind == kind
    assert actions[0].label == label
    assert actions[0].scenario_id == scenario_id


def test_scenario_events_without_scenario_have_no_actions():
    assert available_actions(EventType.PROJECTION_COMPLETED, uuid4(), None) == []


def test_log_only_events_have_no_actions():
    assert available_actions(EventType.SCENARIO_MERGED, uuid4(), uuid4()) == []
    assert available_actions(None, uuid4(), uuid4()) == []


def test_humanize_reasons():
    assert humanize_reasons(["budget_drift_reduced", 3, "lower_risk"]) == [
        "budget drift reduced",
        "lower risk",
    ]
    assert humanize_reasons("budget_drift_reduced") == []


def test_present_recommendation_event():
    previous = make_scenario("Plan A")
    current = make_scenario("Plan B")
    event = make_event(
        "recommendation_computed",
        scenario_id=current.id,
        previous_scenario_id=previous.id,
        payload={"change_reasons": ["schedule_slip_lower"], "domain": "construction"},
    )
    presentation = present_event(event, [previous, current])

    assert presentation.label == "Recommendation"
    assert presentation.variant == BadgeVariant.DEFAULT
    assert presentation.scenario_name == "Plan B"
    assert presentation.previous_scenario_name == "Plan A"
    assert presentation.change_reasons == ["schedule slip lower"]
    assert presentation.domain == "construction"
    assert len(presentation.actions) == 4


def test_previous_name_omitted_when_unchanged():
    scenario = make_scenario("Same")
    event = make_event("active_scenario_changed", scenario.id, previous_scenario_id=scenario.id)
    assert present_event(event, [scenario]).previous_scenario_name is None


@pytest.mark.parametrize(
    "approved, label, variant",
    [
        (True, "Approved", BadgeVariant.DEFAULT),
        (False, "Rejected", BadgeVariant.DESTRUCTIVE),
    ],
)
def test_approval_decided_badge_follows_payload(approved, label, variant):
    presentation = present_event(make_event("merge_approval_decided", payload={"approved": approved}), [])
    assert presentation.label == label
    assert presentation.variant == variant


def test_approval_decided_without_payload_is_rejected():
    assert present_event(make_event("merge_approval_decided"), []).label == "Rejected"


def test_unknown_event_type_renders_raw():
    presentation = present_event(make_event("quantum_recalibrated"), [])
    assert presentation.label == "quantum_recalibrated"
    assert presentation.variant == BadgeVariant.OUTLINE
    assert presentation.actions == []


def test_archived_scenario_has_no_actions_and_keeps_name():
    archived = make_scenario("Retired", is_archived=True)
    presentation = present_event(make_event("projection_completed", archived.id), [archived])
    assert presentation.actions == []
    assert presentation.scenario_name == "Retired"


def test_dangling_scenario_uses_truncated_id():
    missing = uuid4()
    presentation = present_event(make_event("stress_test_completed", missing), [])
    assert presentation.scenario_name == str(missing)[:8]
    assert presentation.actions == []


def test_change_reasons_only_for_recommendations():
    event = make_event("projection_completed", payload={"change_reasons": ["x_y"]})
    assert present_event(event, []).change_reasons == []
