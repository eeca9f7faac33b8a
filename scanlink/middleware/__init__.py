"""HTTP middleware for the scanlink application."""

from scanlink.middleware.logging import LoggingMiddleware, client_ip_from_request

__all__ = ["LoggingMiddleware", "client_ip_from_request"]
