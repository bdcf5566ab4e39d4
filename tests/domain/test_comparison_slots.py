"""Tests for comparison slot composition."""
from uuid import uuid4

import pytest

from cockpit.domain.slots import SlotTag, compose_slots, delta_slot_indices
from cockpit.schemas.scenarios import ScenarioOut

pytestmark = pytest.mark.unit


def make_scenario(name: str) -> ScenarioOut:
    return ScenarioOut(id=uuid4(), project_id=uuid4(), name=name)


def test_three_distinct_roles_give_three_slots_in_order():
    base, active, rec = make_scenario("B"), make_scenario("A"), make_scenario("R")
    slots = compose_slots(base, active, rec)
    assert [s.scenario for s in slots] == [base, active, rec]
    assert [s.tags for s in slots] == [[SlotTag.BASELINE], [SlotTag.ACTIVE], [SlotTag.RECOMMENDED]]
    assert delta_slot_indices(slots) == (2, 0)


def test_shared_scenario_collects_tags():
    base, shared = make_scenario("B"), make_scenario("S")
    slots = compose_slots(base, shared, shared)
    assert len(slots) == 2
    assert slots[1].tags == [SlotTag.ACTIVE, SlotTag.RECOMMENDED]
    assert delta_slot_indices(slots) == (1, 0)


def test_single_scenario_in_all_roles_has_no_delta():
    only = make_scenario("Only")
    slots = compose_slots(only, only, only)
    assert len(slots) == 1
    assert slots[0].tags == [SlotTag.BASELINE, SlotTag.ACTIVE, SlotTag.RECOMMENDED]
    assert delta_slot_indices(slots) is None


def test_missing_roles_are_skipped():
    active = make_scenario("A")
    slots = compose_slots(None, active, None)
    assert [s.scenario for s in slots] == [active]
    assert delta_slot_indices(slots) is None


def test_no_roles_gives_no_slots():
    assert compose_slots(None, None, None) == []
    assert delta_slot_indices([]) is None


def test_delta_requires_recommended():
    slots = compose_slots(make_scenario("B"), make_scenario("A"), None)
    assert delta_slot_indices(slots) is None
