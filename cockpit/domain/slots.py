"""Comparison slot composition.

Pure domain functions: fold the Baseline, Active and Recommended
resolutions into at most three unique, tagged slots.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from cockpit.schemas.scenarios import ScenarioOut

MAX_SLOTS = 3


class SlotTag(StrEnum):
    BASELINE = "Baseline"
    ACTIVE = "Active"
    RECOMMENDED = "Recommended"


@dataclass
class ComparisonSlot:
    scenario: ScenarioOut
    tags: list[SlotTag] = field(default_factory=list)

    def has_tag(self, tag: SlotTag) -> bool:
        return tag in self.tags


def compose_slots(
    baseline: ScenarioOut | None,
    active: ScenarioOut | None,
    recommended: ScenarioOut | None,
) -> list[ComparisonSlot]:
    """Build the comparison slots in Baseline, Active, Recommended order.

    A scenario holding several roles keeps a single slot and collects every
    tag; a missing role is skipped.
    """
    slots: list[ComparisonSlot] = []
    by_id: dict[str, ComparisonSlot] = {}

    for scenario, tag in (
        (baseline, SlotTag.BASELINE),
        (active, SlotTag.ACTIVE),
        (recommended, SlotTag.RECOMMENDED),
    ):
        if scenario is None:
            continue
        key = str(scenario.id)
        existing = by_id.get(key)
        if existing is not None:
            if tag not in existing.tags:
                existing.tags.append(tag)
            continue
        slot = ComparisonSlot(scenario=scenario, tags=[tag])
        by_id[key] = slot
        slots.append(slot)

    return slots[:MAX_SLOTS]


def delta_slot_indices(slots: list[ComparisonSlot]) -> tuple[int, int] | None:
    """Return (recommended_index, baseline_index) when a delta row applies.

    A delta needs both a Baseline-tagged and a Recommended-tagged slot, and
    they must be different slots.
    """
    base_idx = next((i for i, s in enumerate(slots) if s.has_tag(SlotTag.BASELINE)), None)
    rec_idx = next((i for i, s in enumerate(slots) if s.has_tag(SlotTag.RECOMMENDED)), None)
    if base_idx is None or rec_idx is None or base_idx == rec_idx:
        return None
    return rec_idx, base_idx
