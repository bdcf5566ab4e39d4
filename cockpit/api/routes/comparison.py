"""Scenario comparison endpoint.

GET /api/projects/{project_id}/comparison - Baseline / Active / Recommended cards and delta row
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from cockpit.api.deps import get_comparison_service
from cockpit.schemas.comparison import ComparisonResponse
from cockpit.services.comparison_service import ComparisonService

router = APIRouter()


@router.get(
    "/{project_id}/comparison",
    response_model=ComparisonResponse,
    responses={204: {"description": "No scenario resolves to any comparison slot"}},
)
async def get_comparison(
    project_id: UUID,
    baseline_scenario_id: UUID | None = None,
    active_scenario_id: UUID | None = None,
    recommended_scenario_id: UUID | None = None,
    service: ComparisonService = Depends(get_comparison_service),
):
    """Compare up to three scenarios.

    Returns 204 with no body when nothing can be compared.
    """
    comparison = await service.get_comparison(
        project_id,
        baseline_scenario_id=baseline_scenario_id,
        active_scenario_id=active_scenario_id,
        recommended_scenario_id=recommended_scenario_id,
    )
    if comparison is None:
        return Response(status_code=204)
    return comparison
