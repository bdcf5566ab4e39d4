"""Integration tests for drift alert endpoints."""
from uuid import uuid4

import pytest

from cockpit.db.models.drift_alert import DriftAlert
from cockpit.db.models.scenario import ProjectScenario

pytestmark = pytest.mark.integration


def make_alert(project_id, scenario_id, severity="warning", **fields) -> DriftAlert:
    return DriftAlert(
        id=uuid4(),
        project_id=project_id,
        scenario_id=scenario_id,
        severity=severity,
        layer="execution",
        metric_key="schedule_slip",
        **fields,
    )


async def test_list_acknowledge_and_clear(client, add_rows, project_id):
    scenario = ProjectScenario(id=uuid4(), project_id=project_id, name="Plan")
    await add_rows(scenario)
    first = make_alert(project_id, scenario.id, "critical")
    second = make_alert(project_id, scenario.id)
    await add_rows(first, second)

    response = await client.get(f"/api/projects/{project_id}/drift-alerts")
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = await client.post(f"/api/projects/{project_id}/drift-alerts/{first.id}/acknowledge")
    assert response.status_code == 200
    assert response.json() == {"alert_id": str(first.id), "acknowledged": True}

    response = await client.get(
        f"/api/projects/{project_id}/drift-alerts", params={"scenario_id": str(scenario.id)}
    )
    assert [a["id"] for a in response.json()["items"]] == [str(second.id)]

    response = await client.delete(f"/api/projects/{project_id}/scenarios/{scenario.id}/drift-alerts")
    assert response.status_code == 200
    assert response.json() == {"scenario_id": str(scenario.id), "removed": 1}

    response = await client.get(f"/api/projects/{project_id}/drift-alerts")
    assert response.json()["items"] == []


async def test_acknowledge_unknown_alert_is_404(client, project_id):
    response = await client.post(f"/api/projects/{project_id}/drift-alerts/{uuid4()}/acknowledge")
    assert response.status_code == 404
    assert "debug_id" in response.json()
