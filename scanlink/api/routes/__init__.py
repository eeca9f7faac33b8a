"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from scanlink.api.routes import health, links, redirect
from scanlink.core.config import settings

# Create root router
api_router = APIRouter()

# JSON API under the configured prefix
api_router.include_router(
    links.router,
    prefix=settings.API_PREFIX
)

api_router.include_router(health.router)

# Tracking URLs are served at /r/{id}
api_router.include_router(
    redirect.router,
    prefix="/r"
)

__all__ = ["api_router"]
