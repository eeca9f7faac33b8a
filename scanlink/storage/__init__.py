"""
Storage module for short links and scan events.

Services depend only on the Storage interface; the concrete backend
(local embedded SQLite or remote PostgreSQL) is chosen by the factory.
"""

from scanlink.storage.base import Storage
from scanlink.storage.exceptions import (
    StorageError,
    DuplicateIdError,
    StorageUnavailableError,
)
from scanlink.storage.sql import SQLStorage, SQLiteStorage, PostgresStorage
from scanlink.storage.factory import StorageFactory, StorageBackend

__all__ = [
    "Storage",
    "StorageError",
    "DuplicateIdError",
    "StorageUnavailableError",
    "SQLStorage",
    "SQLiteStorage",
    "PostgresStorage",
    "StorageFactory",
    "StorageBackend",
]
