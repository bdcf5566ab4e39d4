"""FastAPI dependencies wiring services to the shared DB, Redis and compute client.

Tests override these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from cockpit.core.config import get_settings
from cockpit.db.base import get_session_factory
from cockpit.db.redis import get_redis
from cockpit.services.comparison_service import ComparisonService
from cockpit.services.compute_client import ComputeClient
from cockpit.services.decision_log_service import DecisionLogService
from cockpit.services.drift_service import DriftService
from cockpit.services.query_cache import QueryCache
from cockpit.services.scenario_service import ScenarioService


def get_query_cache() -> QueryCache:
    return QueryCache(get_redis(), ttl_seconds=get_settings().query_cache_ttl_seconds)


def get_compute_client() -> ComputeClient:
    return ComputeClient()


def get_scenario_service(
    cache: QueryCache = Depends(get_query_cache),
    compute: ComputeClient = Depends(get_compute_client),
) -> ScenarioService:
    return ScenarioService(get_session_factory(), cache, compute)


def get_drift_service(cache: QueryCache = Depends(get_query_cache)) -> DriftService:
    return DriftService(get_session_factory(), cache)


def get_comparison_service(
    cache: QueryCache = Depends(get_query_cache),
    scenario_service: ScenarioService = Depends(get_scenario_service),
    drift_service: DriftService = Depends(get_drift_service),
) -> ComparisonService:
    return ComparisonService(get_session_factory(), cache, scenario_service, drift_service)


def get_decision_log_service(
    cache: QueryCache = Depends(get_query_cache),
    compute: ComputeClient = Depends(get_compute_client),
    scenario_service: ScenarioService = Depends(get_scenario_service),
) -> DecisionLogService:
    return DecisionLogService(get_session_factory(), cache, compute, scenario_service)
