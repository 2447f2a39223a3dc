# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# None of them require authentication, and all answer 200 while the
# process is up; database trouble shows up as "degraded".
# =============================================================================

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from app.dependencies import SettingsDep, StoreDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response with database status."""
    status: str
    timestamp: str
    uptime: float
    environment: str
    database: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
def health_check(request: Request, store: StoreDep, settings: SettingsDep):
    """
    Health check endpoint.

    Reports whether the document store answers. The API keeps serving
    when it doesn't, so status becomes "degraded" instead of failing.
    """
    connected = store.ping()
    return HealthResponse(
        status="healthy" if connected else "degraded",
        timestamp=_timestamp(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        environment=settings.ENVIRONMENT,
        database="connected" if connected else "disconnected",
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive. No dependency checks.
    """
    return LivenessResponse(status="alive", timestamp=_timestamp())


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    """Simple health check for monitoring services."""
    return "OK"
