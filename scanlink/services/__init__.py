"""Service layer for the scanlink application."""

from scanlink.services.analytics import AnalyticsService, AnalyticsSummary
from scanlink.services.id_generator import IdGenerator
from scanlink.services.redirect import RedirectService
from scanlink.services.registration import RegisteredLink, RegistrationService

__all__ = [
    "AnalyticsService",
    "AnalyticsSummary",
    "IdGenerator",
    "RedirectService",
    "RegisteredLink",
    "RegistrationService",
]
