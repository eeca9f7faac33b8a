"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the storage backend and service instances. The storage and the
redirect service are created once per application and kept on
``app.state``.
"""

from fastapi import Depends, Request

from scanlink.services.analytics import AnalyticsService
from scanlink.services.redirect import RedirectService
from scanlink.services.registration import RegistrationService
from scanlink.storage.base import Storage


def get_storage(request: Request) -> Storage:
    """Get the application's storage backend."""
    return request.app.state.storage


def get_registration_service(storage: Storage = Depends(get_storage)) -> RegistrationService:
    """Get an instance of the registration service."""
    return RegistrationService(storage)


def get_redirect_service(request: Request) -> RedirectService:
    """Get the application-wide redirect service."""
    return request.app.state.redirect_service


def get_analytics_service(storage: Storage = Depends(get_storage)) -> AnalyticsService:
    """Get an instance of the analytics service."""
    return AnalyticsService(storage)
