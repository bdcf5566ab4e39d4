from fastapi import APIRouter

from cockpit.api.routes import comparison, decision_log, drift_alerts, health, scenarios

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(scenarios.router, prefix="/projects", tags=["scenarios"])
api_router.include_router(comparison.router, prefix="/projects", tags=["comparison"])
api_router.include_router(decision_log.router, prefix="/projects", tags=["decision-log"])
api_router.include_router(drift_alerts.router, prefix="/projects", tags=["drift-alerts"])
