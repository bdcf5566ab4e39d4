"""ScenarioService: scenario registry reads and scenario mutations.

Reads go through the query cache; every mutation invalidates the keys the
invalidation registry names for it before returning.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

import structlog
from pydantic import TypeAdapter
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cockpit.core.config import get_settings
from cockpit.core.exceptions import PinLimitExceededError, ScenarioNotFoundError
from cockpit.db.models.recommendation import ScenarioRecommendation
from cockpit.db.models.scenario import ProjectScenario
from cockpit.domain.invalidation import CacheFamily, CacheKey, MutationKind
from cockpit.domain.scenarios import (
    ScenarioResolution,
    find_scenario,
    resolve_active,
    resolve_baseline,
    resolve_recommended,
)
from cockpit.schemas.scenarios import ScenarioOut
from cockpit.services.compute_client import ComputeClient
from cockpit.services.query_cache import QueryCache

logger = structlog.get_logger(__name__)

_SCENARIO_LIST = TypeAdapter(list[ScenarioOut])
_OPTIONAL_ID = TypeAdapter(UUID | None)


@dataclass
class ResolvedRoles:
    scenarios: list[ScenarioOut]
    baseline: ScenarioResolution
    active: ScenarioResolution
    recommended: ScenarioResolution


class ScenarioService:
    """Service layer for the scenario registry.

    Uses dependency injection (session_factory, cache, compute) for testability.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: QueryCache,
        compute: ComputeClient,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.compute = compute
        self.settings = get_settings()

    async def list_scenarios(self, project_id: UUID) -> list[ScenarioOut]:
        """Live (non-archived) scenarios of a project, oldest first."""

        async def load() -> list[ScenarioOut]:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ProjectScenario)
                    .where(
                        ProjectScenario.project_id == project_id,
                        ProjectScenario.is_archived.is_(False),
                    )
                    .order_by(ProjectScenario.created_at.asc())
                )
                return [ScenarioOut.model_validate(row) for row in result.scalars().all()]

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.SCENARIOS, project_id), load, _SCENARIO_LIST
        )

    async def latest_recommended_id(self, project_id: UUID) -> UUID | None:
        """recommended_scenario_id of the newest recommendation row, if any."""

        async def load() -> UUID | None:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ScenarioRecommendation.recommended_scenario_id)
                    .where(ScenarioRecommendation.project_id == project_id)
                    .order_by(ScenarioRecommendation.created_at.desc())
                    .limit(1)
                )
                return result.scalar_one_or_none()

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.SCENARIO_RECOMMENDATION, project_id), load, _OPTIONAL_ID
        )

    async def resolve_roles(
        self,
        project_id: UUID,
        baseline_scenario_id: UUID | None = None,
        active_scenario_id: UUID | None = None,
        recommended_scenario_id: UUID | None = None,
    ) -> ResolvedRoles:
        """Load the live scenarios and resolve Baseline, Active and Recommended.

        Without an explicit recommended id, the latest stored recommendation
        stands in as the explicit id.
        """
        scenarios = await self.list_scenarios(project_id)
        if recommended_scenario_id is None:
            recommended_scenario_id = await self.latest_recommended_id(project_id)

        return ResolvedRoles(
            scenarios=scenarios,
            baseline=resolve_baseline(scenarios, baseline_scenario_id),
            active=resolve_active(scenarios, active_scenario_id),
            recommended=resolve_recommended(scenarios, recommended_scenario_id),
        )

    async def _require_live(self, project_id: UUID, scenario_id: UUID) -> ScenarioOut:
        scenario = find_scenario(await self.list_scenarios(project_id), scenario_id)
        if scenario is None:
            raise ScenarioNotFoundError(str(scenario_id))
        return scenario

    async def _load_row(self, session: AsyncSession, project_id: UUID, scenario_id: UUID) -> ProjectScenario:
        result = await session.execute(
            select(ProjectScenario).where(
                ProjectScenario.id == scenario_id,
                ProjectScenario.project_id == project_id,
                ProjectScenario.is_archived.is_(False),
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise ScenarioNotFoundError(str(scenario_id))
        return row

    async def toggle_pin(self, project_id: UUID, scenario_id: UUID) -> tuple[ScenarioOut, int]:
        """Flip the pinned flag.

        Raises:
            ScenarioNotFoundError: scenario missing or archived
            PinLimitExceededError: pinning beyond max_pinned_scenarios
        """
        limit = self.settings.max_pinned_scenarios
        async with self.session_factory() as session:
            row = await self._load_row(session, project_id, scenario_id)

            if not row.pinned:
                result = await session.execute(
                    select(func.count())
                    .select_from(ProjectScenario)
                    .where(
                        ProjectScenario.project_id == project_id,
                        ProjectScenario.is_archived.is_(False),
                        ProjectScenario.pinned.is_(True),
                    )
                )
                if result.scalar_one() >= limit:
                    raise PinLimitExceededError(limit)

            row.pinned = not row.pinned
            await session.commit()
            scenario = ScenarioOut.model_validate(row)

        removed = await self.cache.invalidate_for(MutationKind.TOGGLE_PIN, project_id, scenario_id)
        logger.info("scenario_pin_toggled", project_id=str(project_id), scenario_id=str(scenario_id),
                    pinned=scenario.pinned)
        return scenario, removed

    async def archive(self, project_id: UUID, scenario_id: UUID) -> tuple[ScenarioOut, int]:
        """Soft-delete a scenario. Archived scenarios are also unpinned."""
        async with self.session_factory() as session:
            row = await self._load_row(session, project_id, scenario_id)
            row.is_archived = True
            row.pinned = False
            await session.commit()
            scenario = ScenarioOut.model_validate(row)

        removed = await self.cache.invalidate_for(MutationKind.ARCHIVE, project_id, scenario_id)
        logger.info("scenario_archived", project_id=str(project_id), scenario_id=str(scenario_id))
        return scenario, removed

    async def _run(
        self,
        kind: MutationKind,
        action: str,
        project_id: UUID,
        scenario_id: UUID | None,
        **params: Any,
    ) -> dict[str, Any]:
        try:
            result = await self.compute.simulation(action, project_id, scenarioId=scenario_id, **params)
        except Exception as e:
            logger.warning(
                "scenario_mutation_failed",
                mutation=kind.value,
                project_id=str(project_id),
                scenario_id=str(scenario_id) if scenario_id else None,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        await self.cache.invalidate_for(kind, project_id, scenario_id)
        return result

    async def set_active(self, project_id: UUID, scenario_id: UUID) -> dict[str, Any]:
        """Make a live scenario the operative plan (remote simulation-engine action)."""
        await self._require_live(project_id, scenario_id)
        return await self._run(MutationKind.SET_ACTIVE, "set_active_scenario", project_id, scenario_id)

    async def run_projection(
        self,
        project_id: UUID,
        scenario_id: UUID,
        months: int | None = None,
        assumptions: dict[str, float] | None = None,
    ) -> dict[str, Any]:
        await self._require_live(project_id, scenario_id)
        return await self._run(
            MutationKind.PROJECT_FORWARD,
            "project_forward",
            project_id,
            scenario_id,
            months=months or self.settings.default_projection_months,
            assumptions=assumptions,
        )

    async def run_stress_test(self, project_id: UUID, scenario_id: UUID, months: int | None = None) -> dict[str, Any]:
        await self._require_live(project_id, scenario_id)
        return await self._run(
            MutationKind.STRESS_TEST,
            "stress_test_scenario",
            project_id,
            scenario_id,
            months=months or self.settings.default_projection_months,
        )

    async def recompute_recommendation(
        self,
        project_id: UUID,
        baseline_scenario_id: UUID | None = None,
        active_scenario_id: UUID | None = None,
    ) -> dict[str, Any]:
        return await self._run(
            MutationKind.RECOMPUTE_RECOMMENDATION,
            "recommend_scenario",
            project_id,
            None,
            baselineScenarioId=baseline_scenario_id,
            activeScenarioId=active_scenario_id,
        )

    async def rank_scenarios(self, project_id: UUID) -> dict[str, Any]:
        """Refresh rank_score for every live scenario of a project (remote simulation-engine action)."""
        return await self._run(MutationKind.RANK_SCENARIOS, "rank_scenarios", project_id, None)
