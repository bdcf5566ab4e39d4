"""DecisionLogService: newest-first decision log and its follow-up actions.

The log is read-only here; follow-ups (branch, re-project, re-stress) are
remote compute calls whose completion events are appended upstream.
"""

from typing import Any
from uuid import UUID

import structlog
from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cockpit.core.config import get_settings
from cockpit.core.exceptions import ConfirmationRequiredError, DecisionEventNotFoundError
from cockpit.db.models.decision_event import ScenarioDecisionEvent
from cockpit.domain.decision_log import EventPresentation, present_event
from cockpit.domain.invalidation import CacheFamily, CacheKey, MutationKind
from cockpit.schemas.decision_log import DecisionEventOut, DecisionLogEntry, EventActionOut
from cockpit.services.compute_client import ComputeClient
from cockpit.services.query_cache import QueryCache
from cockpit.services.scenario_service import ScenarioService

logger = structlog.get_logger(__name__)

_EVENT_LIST = TypeAdapter(list[DecisionEventOut])


def _entry(event: DecisionEventOut, presentation: EventPresentation) -> DecisionLogEntry:
    return DecisionLogEntry(
        event=event,
        label=presentation.label,
        variant=presentation.variant.value,
        actions=[
            EventActionOut(
                kind=action.kind.value,
                label=action.label,
                scenario_id=action.scenario_id,
                event_id=action.event_id,
                months=action.months,
                requires_confirmation=action.requires_confirmation,
            )
            for action in presentation.actions
        ],
        change_reasons=presentation.change_reasons,
        domain=presentation.domain,
        scenario_name=presentation.scenario_name,
        previous_scenario_name=presentation.previous_scenario_name,
    )


class DecisionLogService:
    """Service layer for the decision log.

    Uses dependency injection (session_factory, cache, compute, scenario_service) for testability.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: QueryCache,
        compute: ComputeClient,
        scenario_service: ScenarioService,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.compute = compute
        self.scenario_service = scenario_service
        self.settings = get_settings()

    async def list_events(self, project_id: UUID) -> list[DecisionEventOut]:
        """Most recent events, creation time descending."""

        async def load() -> list[DecisionEventOut]:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ScenarioDecisionEvent)
                    .where(ScenarioDecisionEvent.project_id == project_id)
                    .order_by(ScenarioDecisionEvent.created_at.desc())
                    .limit(self.settings.decision_log_limit)
                )
                return [DecisionEventOut.model_validate(row) for row in result.scalars().all()]

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.DECISION_EVENTS, project_id), load, _EVENT_LIST
        )

    async def get_log(self, project_id: UUID) -> list[DecisionLogEntry]:
        """Presented decision log: label, variant and valid actions per event."""
        events = await self.list_events(project_id)
        scenarios = await self.scenario_service.list_scenarios(project_id)
        return [_entry(event, present_event(event, scenarios)) for event in events]

    async def branch_from_event(self, project_id: UUID, event_id: UUID, confirmed: bool) -> dict[str, Any]:
        """Create a new scenario seeded from a recommendation snapshot.

        Raises:
            ConfirmationRequiredError: confirmed is False
            DecisionEventNotFoundError: event not in this project
        """
        if not confirmed:
            raise ConfirmationRequiredError("Branch creation must be confirmed")

        async with self.session_factory() as session:
            result = await session.execute(
                select(ScenarioDecisionEvent.id).where(
                    ScenarioDecisionEvent.id == event_id,
                    ScenarioDecisionEvent.project_id == project_id,
                )
            )
            if result.scalar_one_or_none() is None:
                raise DecisionEventNotFoundError(str(event_id))

        try:
            data = await self.compute.simulation("branch_from_decision_event", project_id, eventId=event_id)
        except Exception as e:
            logger.warning("decision_branch_failed", project_id=str(project_id), event_id=str(event_id),
                           error=str(e), error_type=type(e).__name__)
            raise

        await self.cache.invalidate_for(MutationKind.BRANCH, project_id)
        logger.info("decision_branch_created", project_id=str(project_id), event_id=str(event_id))
        return data
