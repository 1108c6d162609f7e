"""Health endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from weather_widget import __version__
from weather_widget.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    For dependency checks, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/live")
async def liveness_check(request: Request):
    """Liveness probe - is the process running?"""
    startup_time = getattr(request.app.state, "startup_time", None)
    uptime = time.time() - startup_time if startup_time else 0.0
    return {"status": "alive", "uptime_seconds": round(uptime, 1)}


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request):
    """Readiness probe - can the application serve traffic?

    Checks that the lifespan set up the shared HTTP client and the session
    manager. Upstream APIs are not called.

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: Application is not ready
    """
    checks: dict[str, str] = {}

    client = getattr(request.app.state, "http_client", None)
    checks["http_client"] = "ok" if client is not None and not client.is_closed else "failed"

    manager = getattr(request.app.state, "session_manager", None)
    if manager is None:
        checks["session_manager"] = "failed"
    else:
        checks["session_manager"] = "ok"
        checks["sessions"] = str(await manager.session_count())

    checks["requests_served"] = str(getattr(request.app.state, "request_count", 0))

    all_healthy = checks["http_client"] == "ok" and checks["session_manager"] == "ok"
    response = DetailedHealthResponse(
        status="healthy" if all_healthy else "unhealthy",
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
    if not all_healthy:
        return JSONResponse(status_code=503, content=response.model_dump(mode="json"))
    return response
