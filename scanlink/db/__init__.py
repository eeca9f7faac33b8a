"""Database module for the scanlink application."""
from scanlink.db.base import create_engine_for, DatabaseHealthCheck
from scanlink.db.session import SessionManager

__all__ = [
    "create_engine_for",
    "DatabaseHealthCheck",
    "SessionManager",
]
