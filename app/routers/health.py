# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and deployment verification.
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.dependencies import DatabaseDep
from lib.timezone import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Used to verify a deployment is serving requests.
    """
    return HealthResponse(
        status="ok",
        timestamp=utc_now().isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(database: DatabaseDep):
    """
    Readiness check endpoint.

    Returns whether the service can reach the editor sessions table.
    """
    checks = ChecksResponse(database="unknown")

    try:
        client = database.ensure_connected()
        client.table(settings.EDITOR_SESSIONS_TABLE).select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        checks.database = "unhealthy"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=utc_now().isoformat(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=utc_now().isoformat(),
    )
