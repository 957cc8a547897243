# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from app.dependencies import RecordStoreDep, StorageDep
from core.services.post_service import POSTS_TABLE

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/healthz", response_class=PlainTextResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Always answers "ok" while the process is serving requests.
    """
    return "ok"


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness_check(records: RecordStoreDep, storage: StorageDep):
    """
    Readiness check endpoint.

    Checks database and storage connectivity.
    """
    checks = ChecksResponse(database="unknown", storage="unknown")

    try:
        await records.ping(POSTS_TABLE)
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    try:
        await storage.ping()
        checks.storage = "healthy"
    except Exception as e:
        checks.storage = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
