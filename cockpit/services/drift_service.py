"""DriftService: unacknowledged drift alerts: listing, counting, acknowledging, clearing."""

from datetime import UTC, datetime
from uuid import UUID

import structlog
from pydantic import TypeAdapter
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cockpit.core.config import get_settings
from cockpit.core.exceptions import DriftAlertNotFoundError
from cockpit.db.models.drift_alert import DriftAlert
from cockpit.domain.invalidation import CacheFamily, CacheKey, MutationKind
from cockpit.schemas.comparison import DriftCounts
from cockpit.schemas.drift import DriftAlertOut
from cockpit.services.query_cache import QueryCache

logger = structlog.get_logger(__name__)

SEVERITIES = ("critical", "warning", "info")

_ALERT_LIST = TypeAdapter(list[DriftAlertOut])
_COUNTS = TypeAdapter(DriftCounts)


class DriftService:
    """Service layer for drift alerts.

    Only acknowledged = false rows are ever listed or counted.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], cache: QueryCache):
        self.session_factory = session_factory
        self.cache = cache
        self.settings = get_settings()

    async def list_alerts(self, project_id: UUID, scenario_id: UUID | None = None) -> list[DriftAlertOut]:
        """Newest unacknowledged alerts, optionally scoped to one scenario."""

        async def load() -> list[DriftAlertOut]:
            query = select(DriftAlert).where(
                DriftAlert.project_id == project_id,
                DriftAlert.acknowledged.is_(False),
            )
            if scenario_id is not None:
                query = query.where(DriftAlert.scenario_id == scenario_id)
            query = query.order_by(DriftAlert.created_at.desc()).limit(self.settings.drift_alert_limit)

            async with self.session_factory() as session:
                result = await session.execute(query)
                return [DriftAlertOut.model_validate(row) for row in result.scalars().all()]

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.DRIFT_ALERTS, project_id, scenario_id), load, _ALERT_LIST
        )

    async def count_by_severity(self, project_id: UUID, scenario_id: UUID | None) -> DriftCounts:
        """Unacknowledged alert counts for one scenario; no scenario means zero counts, no query."""
        if scenario_id is None:
            return DriftCounts()

        async def load() -> DriftCounts:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(DriftAlert.severity, func.count())
                    .where(
                        DriftAlert.project_id == project_id,
                        DriftAlert.scenario_id == scenario_id,
                        DriftAlert.acknowledged.is_(False),
                    )
                    .group_by(DriftAlert.severity)
                )
                by_severity = {severity: count for severity, count in result.all()}
            return DriftCounts(**{s: by_severity.get(s, 0) for s in SEVERITIES})

        return await self.cache.fetch(
            CacheKey.of(CacheFamily.COMPARISON_DRIFT, project_id, scenario_id), load, _COUNTS
        )

    async def acknowledge(self, project_id: UUID, alert_id: UUID) -> DriftAlertOut:
        """Mark one alert acknowledged.

        Raises:
            DriftAlertNotFoundError: no such alert in this project
        """
        async with self.session_factory() as session:
            result = await session.execute(
                select(DriftAlert).where(
                    DriftAlert.id == alert_id,
                    DriftAlert.project_id == project_id,
                )
            )
            alert = result.scalar_one_or_none()
            if alert is None:
                raise DriftAlertNotFoundError(str(alert_id))

            alert.acknowledged = True
            alert.acknowledged_at = datetime.now(UTC)
            await session.commit()
            out = DriftAlertOut.model_validate(alert)

        await self.cache.invalidate_for(MutationKind.ACKNOWLEDGE_ALERT, project_id, out.scenario_id)
        logger.info("drift_alert_acknowledged", project_id=str(project_id), alert_id=str(alert_id))
        return out

    async def clear_alerts(self, project_id: UUID, scenario_id: UUID) -> int:
        """Delete every unacknowledged alert of a scenario. Returns the number removed."""
        async with self.session_factory() as session:
            result = await session.execute(
                delete(DriftAlert).where(
                    DriftAlert.project_id == project_id,
                    DriftAlert.scenario_id == scenario_id,
                    DriftAlert.acknowledged.is_(False),
                )
            )
            await session.commit()
            removed = result.rowcount or 0

        await self.cache.invalidate_for(MutationKind.CLEAR_ALERTS, project_id, scenario_id)
        logger.info("drift_alerts_cleared", project_id=str(project_id), scenario_id=str(scenario_id),
                    removed=removed)
        return removed
