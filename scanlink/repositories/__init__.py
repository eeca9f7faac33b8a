"""Repository layer for the scanlink application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from scanlink.repositories.base import (
    BaseRepository,
    RepositoryError,
    ConstraintViolationError,
)
from scanlink.repositories.short_link_repository import ShortLinkRepository
from scanlink.repositories.scan_repository import ScanRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "ConstraintViolationError",
    
    # Concrete repositories
    "ShortLinkRepository",
    "ScanRepository",
]
