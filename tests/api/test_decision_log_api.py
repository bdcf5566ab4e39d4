"""Integration tests for decision log endpoints."""
from uuid import uuid4

import pytest

from cockpit.db.models.decision_event import ScenarioDecisionEvent

pytestmark = pytest.mark.integration


async def test_empty_log_returns_empty_items(client, project_id):
    response = await client.get(f"/api/projects/{project_id}/decision-log")
    assert response.status_code == 200
    assert response.json() == {"project_id": str(project_id), "items": [], "total": 0}


async def test_log_entries(client, add_rows, project_id):
    missing_scenario = uuid4()
    await add_rows(ScenarioDecisionEvent(
        project_id=project_id,
        event_type="merge_approval_decided",
        scenario_id=missing_scenario,
        payload={"approved": True},
    ))

    response = await client.get(f"/api/projects/{project_id}/decision-log")

    item = response.json()["items"][0]
    assert item["label"] == "Approved"
    assert item["variant"] == "default"
    assert item["scenario_name"] == str(missing_scenario)[:8]
    assert item["actions"] == []


async def test_branch_requires_confirmation(client, add_rows, project_id):
    event = ScenarioDecisionEvent(id=uuid4(), project_id=project_id, event_type="recommendation_computed")
    await add_rows(event)

    response = await client.post(
        f"/api/projects/{project_id}/decision-log/{event.id}/branch", json={"confirmed": False}
    )
    assert response.status_code == 400


async def test_branch_confirmed(client, add_rows, project_id, compute_recorder):
    event = ScenarioDecisionEvent(id=uuid4(), project_id=project_id, event_type="recommendation_computed")
    await add_rows(event)
    compute_recorder.response = {"scenario_id": "new"}

    response = await client.post(
        f"/api/projects/{project_id}/decision-log/{event.id}/branch", json={"confirmed": True}
    )

    assert response.status_code == 200
    assert response.json()["result"] == {"scenario_id": "new"}
    assert compute_recorder.calls[0]["body"]["eventId"] == str(event.id)


async def test_branch_unknown_event_is_404(client, project_id):
    response = await client.post(
        f"/api/projects/{project_id}/decision-log/{uuid4()}/branch", json={"confirmed": True}
    )
    assert response.status_code == 404
