"""Tests for the remote compute function client."""
from uuid import uuid4

import httpx
import pytest

from cockpit.core.exceptions import ComputeFunctionError
from cockpit.services.compute_client import ComputeClient

pytestmark = pytest.mark.unit


async def test_simulation_posts_action_body(compute, compute_recorder):
    project, scenario = uuid4(), uuid4()
    compute_recorder.response = {"projection_id": "p1"}

    result = await compute.simulation("project_forward", project, scenarioId=scenario, months=12, assumptions=None)

    assert result == {"projection_id": "p1"}
    call = compute_recorder.calls[0]
    assert call["url"] == "http://compute.test/functions/v1/simulation-engine"
    assert call["headers"]["authorization"] == "Bearer test-key"
    assert call["body"] == {
        "action": "project_forward",
        "projectId": str(project),
        "scenarioId": str(scenario),
        "months": 12,
    }


async def test_error_body_raises(compute, compute_recorder):
    compute_recorder.response = {"error": "scenario locked"}
    with pytest.raises(ComputeFunctionError, match="scenario locked"):
        await compute.invoke("simulation-engine", {})


async def test_http_error_status_raises_with_status(compute, compute_recorder):
    compute_recorder.status_code = 500
    compute_recorder.response = {"error": "boom"}
    with pytest.raises(ComputeFunctionError) as exc_info:
        await compute.invoke("simulation-engine", {})
    assert exc_info.value.status == 500
    assert exc_info.value.status_code == 502
    assert "boom" in str(exc_info.value)


async def test_non_object_body_is_wrapped(compute, compute_recorder):
    compute_recorder.response = [1, 2]
    assert await compute.invoke("simulation-engine", {}) == {"data": [1, 2]}


async def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = ComputeClient(base_url="http://compute.test", transport=httpx.MockTransport(handler))
    with pytest.raises(ComputeFunctionError, match="refused"):
        await client.invoke("simulation-engine", {})


async def test_invalid_json_raises():
    client = ComputeClient(
        base_url="http://compute.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="not json")),
    )
    with pytest.raises(ComputeFunctionError, match="invalid JSON"):
        await client.invoke("simulation-engine", {})


async def test_no_auth_header_without_key():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={})

    client = ComputeClient(base_url="http://compute.test/", api_key="", transport=httpx.MockTransport(handler))
    await client.invoke("simulation-engine", {})
    assert "authorization" not in seen
