"""API package for the scanlink application.

This package contains the API layer components including routes,
request/response schemas, and dependency providers.
"""

from scanlink.api.routes import api_router

__all__ = ["api_router"]
