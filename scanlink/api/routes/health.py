"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from scanlink.api.dependencies import get_storage
from scanlink.core.config import settings
from scanlink.storage.base import Storage

router = APIRouter(tags=["health"])

STARTED_AT = time.time()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components",
)
async def health_check(storage: Storage = Depends(get_storage)):
    """Check health of all system components."""
    storage_health = await storage.health_check()
    return {
        "status": "ok" if storage_health["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "uptime": round(time.time() - STARTED_AT, 3),
        "components": {"storage": storage_health},
    }


@router.get("/health/live", summary="Liveness probe")
async def liveness_probe():
    """Check if the application process is running."""
    return {"status": "alive", "timestamp": time.time()}


@router.get("/health/ready", summary="Readiness probe")
async def readiness_probe(storage: Storage = Depends(get_storage)):
    """Check if the storage backend can serve requests."""
    storage_health = await storage.health_check()
    is_ready = storage_health["status"] == "healthy"
    
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if is_ready else "not_ready",
            "components": {"api": True, "storage": is_ready},
            "timestamp": time.time(),
        },
    )
