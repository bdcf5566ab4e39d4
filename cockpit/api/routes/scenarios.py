"""Scenario registry endpoints.

GET  /api/projects/{project_id}/scenarios                              - live scenarios + resolved roles
POST /api/projects/{project_id}/scenarios/{scenario_id}/activate      - make scenario the operative plan
POST /api/projects/{project_id}/scenarios/{scenario_id}/pin           - toggle pinned
POST /api/projects/{project_id}/scenarios/{scenario_id}/archive       - soft-delete
POST /api/projects/{project_id}/scenarios/{scenario_id}/projection    - run forward projection
POST /api/projects/{project_id}/scenarios/{scenario_id}/stress-test   - run stress test
POST /api/projects/{project_id}/scenarios/rank                         - refresh rank scores
POST /api/projects/{project_id}/recommendation                         - recompute recommendation
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from cockpit.api.deps import get_scenario_service
from cockpit.domain.scenarios import ScenarioResolution
from cockpit.schemas.scenarios import (
    ComputeResultResponse,
    ProjectionRequest,
    ScenarioListResponse,
    ScenarioMutationResponse,
    ScenarioRoleOut,
    StressTestRequest,
)
from cockpit.services.compute_client import SIMULATION_ENGINE
from cockpit.services.scenario_service import ScenarioService

router = APIRouter()


def _role(resolution: ScenarioResolution) -> ScenarioRoleOut:
    scenario = resolution.scenario
    return ScenarioRoleOut(
        scenario_id=scenario.id if scenario else None,
        name=scenario.name if scenario else None,
        source=resolution.source.value,
    )


@router.get("/{project_id}/scenarios", response_model=ScenarioListResponse)
async def list_scenarios(
    project_id: UUID,
    baseline_scenario_id: UUID | None = None,
    active_scenario_id: UUID | None = None,
    recommended_scenario_id: UUID | None = None,
    service: ScenarioService = Depends(get_scenario_service),
) -> ScenarioListResponse:
    """List live scenarios and report which one fills each comparison role, and why."""
    roles = await service.resolve_roles(
        project_id,
        baseline_scenario_id=baseline_scenario_id,
        active_scenario_id=active_scenario_id,
        recommended_scenario_id=recommended_scenario_id,
    )
    return ScenarioListResponse(
        project_id=str(project_id),
        scenarios=roles.scenarios,
        baseline=_role(roles.baseline),
        active=_role(roles.active),
        recommended=_role(roles.recommended),
    )


@router.post("/{project_id}/scenarios/{scenario_id}/activate", response_model=ComputeResultResponse)
async def activate_scenario(
    project_id: UUID,
    scenario_id: UUID,
    service: ScenarioService = Depends(get_scenario_service),
) -> ComputeResultResponse:
    result = await service.set_active(project_id, scenario_id)
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="set_active_scenario", result=result)


@router.post("/{project_id}/scenarios/{scenario_id}/pin", response_model=ScenarioMutationResponse)
async def toggle_pin(
    project_id: UUID,
    scenario_id: UUID,
    service: ScenarioService = Depends(get_scenario_service),
) -> ScenarioMutationResponse:
    scenario, removed = await service.toggle_pin(project_id, scenario_id)
    return ScenarioMutationResponse(scenario=scenario, invalidated=removed)


@router.post("/{project_id}/scenarios/{scenario_id}/archive", response_model=ScenarioMutationResponse)
async def archive_scenario(
    project_id: UUID,
    scenario_id: UUID,
    service: ScenarioService = Depends(get_scenario_service),
) -> ScenarioMutationResponse:
    scenario, removed = await service.archive(project_id, scenario_id)
    return ScenarioMutationResponse(scenario=scenario, invalidated=removed)


@router.post("/{project_id}/scenarios/{scenario_id}/projection", response_model=ComputeResultResponse)
async def run_projection(
    project_id: UUID,
    scenario_id: UUID,
    request: ProjectionRequest | None = None,
    service: ScenarioService = Depends(get_scenario_service),
) -> ComputeResultResponse:
    request = request or ProjectionRequest()
    result = await service.run_projection(
        project_id, scenario_id, months=request.months, assumptions=request.assumptions
    )
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="project_forward", result=result)


@router.post("/{project_id}/scenarios/{scenario_id}/stress-test", response_model=ComputeResultResponse)
async def run_stress_test(
    project_id: UUID,
    scenario_id: UUID,
    request: StressTestRequest | None = None,
    service: ScenarioService = Depends(get_scenario_service),
) -> ComputeResultResponse:
    months = request.months if request else None
    result = await service.run_stress_test(project_id, scenario_id, months=months)
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="stress_test_scenario", result=result)


@router.post("/{project_id}/recommendation", response_model=ComputeResultResponse)
async def recompute_recommendation(
    project_id: UUID,
    baseline_scenario_id: UUID | None = None,
    active_scenario_id: UUID | None = None,
    service: ScenarioService = Depends(get_scenario_service),
) -> ComputeResultResponse:
    result = await service.recompute_recommendation(
        project_id,
        baseline_scenario_id=baseline_scenario_id,
        active_scenario_id=active_scenario_id,
    )
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="recommend_scenario", result=result)


@router.post("/{project_id}/scenarios/rank", response_model=ComputeResultResponse)
async def rank_scenarios(
    project_id: UUID,
    service: ScenarioService = Depends(get_scenario_service),
) -> ComputeResultResponse:
    result = await service.rank_scenarios(project_id)
    return ComputeResultResponse(function=SIMULATION_ENGINE, action="rank_scenarios", result=result)
