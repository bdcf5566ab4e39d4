"""Decision log endpoints.

GET  /api/projects/{project_id}/decision-log                   - newest-first events with actions
POST /api/projects/{project_id}/decision-log/{event_id}/branch - branch from a recommendation snapshot
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from cockpit.api.deps import get_decision_log_service
from cockpit.schemas.decision_log import BranchRequest, DecisionLogResponse
from cockpit.schemas.scenarios import ComputeResultResponse
from cockpit.services.compute_client import SIMULATION_ENGINE
from cockpit.services.decision_log_service import DecisionLogService

router = APIRouter()


@router.get("/{project_id}/decision-log", response_model=DecisionLogResponse)
async def get_decision_log(
    project_id: UUID,
    service: DecisionLogService = Depends(get_decision_log_service),
) -> DecisionLogResponse:
    items = await service.get_log(project_id)
    return DecisionLogResponse(project_id=str(project_id), items=items, total=len(items))


@router.post("/{project_id}/decision-log/{event_id}/branch", response_model=ComputeResultResponse)
async def branch_from_event(
    project_id: UUID,
    event_id: UUID,
    request: BranchRequest,
    service: DecisionLogService = Depends(get_decision_log_service),
) -> ComputeResultResponse:
    """Branch a new scenario from a historical recommendation. Requires confirmed=true."""
    result = await service.branch_from_event(project_id, event_id, confirmed=request.confirmed)
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="branch_from_decision_event", result=result)
