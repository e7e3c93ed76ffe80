"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/health always returns 200 if the process is up, and reports
      whether the database answered
    - GET /api/health/ready returns 503 if the database is unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from portfolio.config import Settings, get_settings
from portfolio.infrastructure import database

router = APIRouter(prefix="/api/health", tags=["health"])


async def _database_ok() -> bool:
    manager = database.db_manager
    return await manager.health_check() if manager else False


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Liveness probe with a database connectivity summary."""
    db_ok = await _database_ok()
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "database": "Connected" if db_ok else "Disconnected",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    if not await _database_ok():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
