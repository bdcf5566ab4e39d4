"""Tests for DriftService: listing, severity counts, acknowledging and clearing."""
from uuid import uuid4

import pytest
import pytest_asyncio

from cockpit.core.exceptions import DriftAlertNotFoundError
from cockpit.db.models.drift_alert import DriftAlert
from cockpit.db.models.scenario import ProjectScenario
from cockpit.domain.invalidation import CacheFamily, CacheKey
from cockpit.schemas.comparison import DriftCounts
from cockpit.services.drift_service import DriftService

pytestmark = pytest.mark.unit


@pytest.fixture
def service(session_factory, cache):
    return DriftService(session_factory, cache)


@pytest_asyncio.fixture
async def scenario(add_rows, project_id):
    row = ProjectScenario(id=uuid4(), project_id=project_id, name="Plan")
    await add_rows(row)
    return row


@pytest.fixture
def alert_row(project_id, clock):
    def _make(scenario_id, severity="warning", **fields) -> DriftAlert:
        return DriftAlert(
            id=uuid4(),
            project_id=project_id,
            scenario_id=scenario_id,
            severity=severity,
            layer="finance",
            metric_key="budget_variance",
            created_at=clock(),
            **fields,
        )

    return _make


async def test_list_alerts_newest_first_unacknowledged(service, add_rows, alert_row, scenario, project_id):
    old = alert_row(scenario.id, message="old")
    acked = alert_row(scenario.id, message="acked", acknowledged=True)
    new = alert_row(scenario.id, message="new")
    await add_rows(old, acked, new)

    alerts = await service.list_alerts(project_id)
    assert [a.message for a in alerts] == ["new", "old"]


async def test_list_alerts_scoped_to_scenario(service, add_rows, alert_row, scenario, project_id):
    await add_rows(alert_row(scenario.id, message="mine"), alert_row(None, message="project"))

    alerts = await service.list_alerts(project_id, scenario.id)
    assert [a.message for a in alerts] == ["mine"]


async def test_list_alerts_limit(service, add_rows, alert_row, scenario, project_id):
    await add_rows(*[alert_row(scenario.id) for _ in range(25)])
    assert len(await service.list_alerts(project_id)) == 20


async def test_count_by_severity(service, add_rows, alert_row, scenario, project_id):
    await add_rows(
        alert_row(scenario.id, "critical"),
        alert_row(scenario.id, "critical"),
        alert_row(scenario.id, "info"),
        alert_row(scenario.id, "critical", acknowledged=True),
    )
    counts = await service.count_by_severity(project_id, scenario.id)
    assert counts == DriftCounts(critical=2, warning=0, info=1)


async def test_count_without_scenario_is_zero(service, project_id, fake_redis):
    assert await service.count_by_severity(project_id, None) == DriftCounts()
    assert await fake_redis.keys("*") == []


async def test_acknowledge_hides_alert_and_sets_timestamp(
    service, add_rows, alert_row, scenario, project_id, session_factory
):
    alert = alert_row(scenario.id, "critical")
    await add_rows(alert)
    assert (await service.count_by_severity(project_id, scenario.id)).critical == 1

    out = await service.acknowledge(project_id, alert.id)
    assert out.acknowledged is True

    async with session_factory() as session:
        stored = await session.get(DriftAlert, alert.id)
        assert stored.acknowledged_at is not None

    assert await service.list_alerts(project_id) == []
    assert (await service.count_by_severity(project_id, scenario.id)).critical == 0


async def test_acknowledge_unknown_alert(service, project_id):
    with pytest.raises(DriftAlertNotFoundError):
        await service.acknowledge(project_id, uuid4())


async def test_acknowledge_other_project_alert(service, add_rows, alert_row, scenario):
    alert = alert_row(scenario.id)
    await add_rows(alert)
    with pytest.raises(DriftAlertNotFoundError):
        await service.acknowledge(uuid4(), alert.id)


async def test_clear_alerts_zeroes_counts_and_invalidates_both_views(
    service, add_rows, alert_row, scenario, project_id, fake_redis
):
    await add_rows(
        alert_row(scenario.id, "critical"),
        alert_row(scenario.id, "warning"),
        alert_row(scenario.id, "info", acknowledged=True),
    )
    await service.list_alerts(project_id, scenario.id)
    await service.count_by_severity(project_id, scenario.id)

    removed = await service.clear_alerts(project_id, scenario.id)

    assert removed == 2
    assert not await fake_redis.exists(CacheKey.of(CacheFamily.DRIFT_ALERTS, project_id, scenario.id).render())
    assert not await fake_redis.exists(CacheKey.of(CacheFamily.COMPARISON_DRIFT, project_id, scenario.id).render())
    assert await service.count_by_severity(project_id, scenario.id) == DriftCounts()
    assert await service.list_alerts(project_id, scenario.id) == []
