"""ComputeClient: invokes named remote compute functions.

The functions (simulation-engine and friends) are opaque: the client sends
a JSON body and hands back the JSON result. Transport failures, non-2xx
responses and ``{"error": ...}`` bodies all raise ComputeFunctionError.
"""

from typing import Any
from uuid import UUID

import httpx
import structlog

from cockpit.core.config import get_settings
from cockpit.core.exceptions import ComputeFunctionError

logger = structlog.get_logger(__name__)

SIMULATION_ENGINE = "simulation-engine"


class ComputeClient:
    """Client for the remote compute function endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.compute_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.compute_api_key
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def invoke(self, function_name: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST body to a compute function and return its JSON result."""
        url = f"{self.base_url}/functions/v1/{function_name}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(
                "compute_function_transport_error",
                function=function_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ComputeFunctionError(function_name, str(e)) from e

        if response.status_code >= 400:
            raise ComputeFunctionError(function_name, _error_message(response), status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ComputeFunctionError(function_name, "invalid JSON response", status=response.status_code) from e

        if not isinstance(data, dict):
            return {"data": data}
        if data.get("error"):
            raise ComputeFunctionError(function_name, str(data["error"]), status=response.status_code)
        return data

    async def simulation(self, action: str, project_id: Any, **params: Any) -> dict[str, Any]:
        """Invoke a simulation-engine action. None-valued params are left out."""
        body: dict[str, Any] = {"action": action, "projectId": str(project_id)}
        for key, value in params.items():
            if value is not None:
                body[key] = str(value) if isinstance(value, UUID) else value
        logger.info("compute_function_invoked", function=SIMULATION_ENGINE, action=action, project_id=str(project_id))
        return await self.invoke(SIMULATION_ENGINE, body)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"HTTP {response.status_code}"
