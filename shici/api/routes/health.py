"""Health & Readiness — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 until the application context is built (readiness)
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from shici import __version__

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "shici-canvas",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check — token and font loaded."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "context_not_built"},
        )
    return {
        "status": "ready",
        "checks": {"token": "loaded", "font": context.font.family or "loaded"},
    }
