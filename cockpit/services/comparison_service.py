"""ComparisonService: composes the Baseline / Active / Recommended comparison.

Orchestrates domain functions with concurrent per-slot reads:
- slots are resolved and deduplicated by the domain layer
- every slot fetches latest projection, latest stress test and drift counts
  concurrently, each read in its own session
- a failing slot degrades to an error card without touching its siblings
"""

import asyncio
from uuid import UUID

import structlog
from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cockpit.db.models.projection import ScenarioProjection
from cockpit.db.models.stress_test import ScenarioStressTest
from cockpit.domain.deltas import SideSnapshot, card_display, compute_deltas
from cockpit.domain.invalidation import CacheFamily, CacheKey
from cockpit.domain.metrics import ProjectionMetrics, extract_metrics
from cockpit.domain.slots import ComparisonSlot, compose_slots, delta_slot_indices
from cockpit.schemas.comparison import (
    ComparisonResponse,
    DeltaItem,
    DriftCounts,
    MetricsOut,
    ProjectionOut,
    ScenarioCard,
    StressTestOut,
)
from cockpit.services.drift_service import DriftService
from cockpit.services.query_cache import QueryCache
from cockpit.services.scenario_service import ScenarioService

logger = structlog.get_logger(__name__)

_PROJECTION = TypeAdapter(ProjectionOut | None)
_STRESS = TypeAdapter(StressTestOut | None)


class ComparisonService:
    """Builds ComparisonResponse payloads.

    Uses dependency injection (session_factory, cache, sibling services) for testability.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: QueryCache,
        scenario_service: ScenarioService,
        drift_service: DriftService,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.scenario_service = scenario_service
        self.drift_service = drift_service

    async def latest_projection(self, project_id: UUID, scenario_id: UUID | None) -> ProjectionOut | None:
        """Newest projection of a scenario. No scenario short-circuits to None without a query."""
        if scenario_id is None:
            return None

        async def load() -> ProjectionOut | None:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ScenarioProjection)
                    .where(
                        ScenarioProjection.project_id == project_id,
                        ScenarioProjection.scenario_id == scenario_id,
                    )
                    .order_by(ScenarioProjection.created_at.desc())
                    .limit(1)
                )
                row = result.scalar_one_or_none()
                return ProjectionOut.model_validate(row) if row is not None else None

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.COMPARISON_PROJECTION, project_id, scenario_id), load, _PROJECTION
        )

    async def latest_stress_test(self, project_id: UUID, scenario_id: UUID | None) -> StressTestOut | None:
        """Newest stress test of a scenario. No scenario short-circuits to None without a query."""
        if scenario_id is None:
            return None

        async def load() -> StressTestOut | None:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ScenarioStressTest)
                    .where(
                        ScenarioStressTest.project_id == project_id,
                        ScenarioStressTest.scenario_id == scenario_id,
                    )
                    .order_by(ScenarioStressTest.created_at.desc())
                    .limit(1)
                )
                row = result.scalar_one_or_none()
                return StressTestOut.model_validate(row) if row is not None else None

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.COMPARISON_STRESS, project_id, scenario_id), load, _STRESS
        )

    async def _build_card(self, project_id: UUID, slot: ComparisonSlot, active_id: UUID | None) -> ScenarioCard:
        scenario_id = slot.scenario.id
        projection, stress, drift = await asyncio.gather(
            self.latest_projection(project_id, scenario_id),
            self.latest_stress_test(project_id, scenario_id),
            self.drift_service.count_by_severity(project_id, scenario_id),
        )
        metrics = extract_metrics(projection)
        return ScenarioCard(
            scenario=slot.scenario,
            tags=[tag.value for tag in slot.tags],
            is_active=active_id is not None and scenario_id == active_id,
            metrics=MetricsOut(**metrics.to_dict()),
            stress=stress,
            drift=drift,
            display=card_display(
                metrics,
                stress.fragility_score if stress else None,
                stress.volatility_index if stress else None,
            ),
        )

    async def get_comparison(
        self,
        project_id: UUID,
        baseline_scenario_id: UUID | None = None,
        active_scenario_id: UUID | None = None,
        recommended_scenario_id: UUID | None = None,
        raise_errors: bool = False,
    ) -> ComparisonResponse | None:
        """Compose the comparison for a project.

        Args:
            project_id: Project UUID
            baseline_scenario_id: Optional explicit Baseline
            active_scenario_id: Optional explicit Active
            recommended_scenario_id: Optional explicit Recommended
            raise_errors: Propagate the first slot failure instead of degrading the card

        Returns:
            ComparisonResponse, or None when no slot resolves (nothing to compare)
        """
        roles = await self.scenario_service.resolve_roles(
            project_id,
            baseline_scenario_id=baseline_scenario_id,
            active_scenario_id=active_scenario_id,
            recommended_scenario_id=recommended_scenario_id,
        )
        slots = compose_slots(roles.baseline.scenario, roles.active.scenario, roles.recommended.scenario)
        if not slots:
            return None

        active_id = roles.active.scenario_id
        results = await asyncio.gather(
            *(self._build_card(project_id, slot, active_id) for slot in slots),
            return_exceptions=not raise_errors,
        )

        cards: list[ScenarioCard] = []
        for slot, result in zip(slots, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    "comparison_slot_failed",
                    project_id=str(project_id),
                    scenario_id=str(slot.scenario.id),
                    error=str(result),
                    error_type=type(result).__name__,
                )
                cards.append(ScenarioCard(
                    scenario=slot.scenario,
                    tags=[tag.value for tag in slot.tags],
                    is_active=active_id is not None and slot.scenario.id == active_id,
                    error=str(result) or type(result).__name__,
                ))
            else:
                cards.append(result)

        deltas = self._deltas(slots, cards)
        logger.debug(
            "comparison_composed",
            project_id=str(project_id),
            slots=len(cards),
            baseline_source=roles.baseline.source.value,
            active_source=roles.active.source.value,
            recommended_source=roles.recommended.source.value,
        )
        return ComparisonResponse(
            project_id=str(project_id),
            cards=cards,
            deltas=deltas,
            has_delta=bool(deltas),
        )

    def _deltas(self, slots: list[ComparisonSlot], cards: list[ScenarioCard]) -> list[DeltaItem]:
        indices = delta_slot_indices(slots)
        if indices is None:
            return []
        rec_card, base_card = cards[indices[0]], cards[indices[1]]
        if rec_card.error or base_card.error:
            return []

        deltas = compute_deltas(_snapshot(rec_card), _snapshot(base_card))
        return [DeltaItem(label=d.label, value=d.value, display=d.display) for d in deltas]


def _snapshot(card: ScenarioCard) -> SideSnapshot:
    metrics = card.metrics or MetricsOut()
    drift = card.drift or DriftCounts()
    return SideSnapshot(
        metrics=ProjectionMetrics(**metrics.model_dump()),
        critical_drift=drift.critical,
        fragility=card.stress.fragility_score if card.stress else None,
        volatility=card.stress.volatility_index if card.stress else None,
    )
