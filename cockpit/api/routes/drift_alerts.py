"""Drift alert endpoints.

GET    /api/projects/{project_id}/drift-alerts                          - unacknowledged alerts
POST   /api/projects/{project_id}/drift-alerts/{alert_id}/acknowledge   - acknowledge one alert
DELETE /api/projects/{project_id}/scenarios/{scenario_id}/drift-alerts  - clear a scenario's alerts
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from cockpit.api.deps import get_drift_service
from cockpit.schemas.drift import AcknowledgeAlertResponse, ClearAlertsResponse, DriftAlertListResponse
from cockpit.services.drift_service import DriftService

router = APIRouter()


@router.get("/{project_id}/drift-alerts", response_model=DriftAlertListResponse)
async def list_drift_alerts(
    project_id: UUID,
    scenario_id: UUID | None = None,
    service: DriftService = Depends(get_drift_service),
) -> DriftAlertListResponse:
    items = await service.list_alerts(project_id, scenario_id)
    return DriftAlertListResponse(
        project_id=str(project_id),
        scenario_id=str(scenario_id) if scenario_id else None,
        items=items,
        total=len(items),
    )


@router.post("/{project_id}/drift-alerts/{alert_id}/acknowledge", response_model=AcknowledgeAlertResponse)
async def acknowledge_drift_alert(
    project_id: UUID,
    alert_id: UUID,
    service: DriftService = Depends(get_drift_service),
) -> AcknowledgeAlertResponse:
    alert = await service.acknowledge(project_id, alert_id)
    return AcknowledgeAlertResponse(alert_id=str(alert.id), acknowledged=alert.acknowledged)


@router.delete("/{project_id}/scenarios/{scenario_id}/drift-alerts", response_model=ClearAlertsResponse)
async def clear_drift_alerts(
    project_id: UUID,
    scenario_id: UUID,
    service: DriftService = Depends(get_drift_service),
) -> ClearAlertsResponse:
    removed = await service.clear_alerts(project_id, scenario_id)
    return ClearAlertsResponse(scenario_id=str(scenario_id), removed=removed)
