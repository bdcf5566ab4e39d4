"""Integration tests for the comparison endpoint."""
from uuid import uuid4

import pytest

from cockpit.db.models.projection import ScenarioProjection
from cockpit.db.models.scenario import ProjectScenario

pytestmark = pytest.mark.integration


async def test_no_scenarios_is_204(client, project_id):
    response = await client.get(f"/api/projects/{project_id}/comparison")
    assert response.status_code == 204
    assert response.content == b""


async def test_comparison_payload(client, add_rows, project_id, clock):
    base = ProjectScenario(id=uuid4(), project_id=project_id, name="Base",
                           scenario_type="baseline", created_at=clock())
    rec = ProjectScenario(id=uuid4(), project_id=project_id, name="Rec",
                          is_recommended=True, created_at=clock())
    await add_rows(base, rec)
    await add_rows(
        ScenarioProjection(project_id=project_id, scenario_id=base.id, months=10, summary=["IRR: 10%"]),
        ScenarioProjection(project_id=project_id, scenario_id=rec.id, months=8, summary=["IRR: 14.25%"]),
    )

    response = await client.get(f"/api/projects/{project_id}/comparison")

    assert response.status_code == 200
    data = response.json()
    assert [c["tags"] for c in data["cards"]] == [["Baseline"], ["Recommended"]]
    assert data["cards"][1]["display"]["IRR"] == "14.25%"
    assert data["has_delta"] is True
    deltas = {d["label"]: d["display"] for d in data["deltas"]}
    assert deltas["IRR Δ"] == "+4.25%"
    assert deltas["Schedule Δ"] == "-2 mo"
    assert deltas["Fragility Δ"] == "—"


async def test_explicit_active_id(client, add_rows, project_id):
    chosen = ProjectScenario(id=uuid4(), project_id=project_id, name="Chosen")
    await add_rows(chosen)

    response = await client.get(
        f"/api/projects/{project_id}/comparison", params={"active_scenario_id": str(chosen.id)}
    )

    assert response.status_code == 200
    card = response.json()["cards"][0]
    assert card["tags"] == ["Active"]
    assert card["is_active"] is True
    assert response.json()["deltas"] == []
