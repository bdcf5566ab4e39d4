import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Liveness check. Returns 503 while the process drains on shutdown."""
    if getattr(request.app.state, "shutting_down", False):
        return JSONResponse(
            status_code=503,
            content={"status": "shutting_down", "service": "scenario-cockpit"},
        )
    return {"status": "healthy", "service": "scenario-cockpit"}


@router.get("/ready")
async def readiness_check():
    """Readiness check - verifies database and Redis are reachable."""
    checks = {"database": False, "redis": False}

    try:
        from cockpit.db.base import get_session_factory

        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e), error_type=type(e).__name__)

    try:
        from cockpit.db.redis import get_redis

        await get_redis().ping()
        checks["redis"] = True
    except Exception as e:
        logger.error("redis_health_check_failed", error=str(e), error_type=type(e).__name__)

    all_healthy = all(checks.values())
    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={"status": "ready" if all_healthy else "degraded", "checks": checks},
    )
