"""
Factory for creating storage instances.

The backend is chosen from settings; ``auto`` selects the remote store
whenever a remote database URL is configured.
"""

import logging
from enum import Enum
from typing import Optional

from scanlink.core.config import settings
from scanlink.storage.base import Storage
from scanlink.storage.sql import PostgresStorage, SQLiteStorage

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available storage backends"""
    SQLITE = "sqlite"
    POSTGRES = "postgres"


class StorageFactory:
    """Simple factory for creating storage instances from settings."""
    
    @staticmethod
    def resolve_backend(name: Optional[str] = None) -> StorageBackend:
        """Map a configured backend name (including ``auto``) to a backend."""
        name = (name or settings.STORAGE_BACKEND).lower()
        if name == "auto":
            return StorageBackend.POSTGRES if settings.REMOTE_DATABASE_URL else StorageBackend.SQLITE
        return StorageBackend(name)
    
    @classmethod
    def create(cls, backend: Optional[StorageBackend] = None) -> Storage:
        """
        Create a storage instance.
        
        Args:
            backend: Storage backend; resolved from settings when omitted
            
        Returns:
            A new, not yet initialized Storage
        """
        if backend is None:
            backend = cls.resolve_backend()
        
        if backend == StorageBackend.SQLITE:
            logger.info(f"Using local SQLite storage at {settings.DATABASE_PATH}")
            return SQLiteStorage(path=settings.DATABASE_PATH)
        
        if backend == StorageBackend.POSTGRES:
            if not settings.REMOTE_DATABASE_URL:
                raise ValueError("REMOTE_DATABASE_URL must be set for the postgres storage backend")
            logger.info("Using remote PostgreSQL storage")
            return PostgresStorage(url=settings.REMOTE_DATABASE_URL)
        
        raise ValueError(f"Unknown storage backend: {backend}")
