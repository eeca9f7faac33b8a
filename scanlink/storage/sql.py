"""
SQL storage backends.

Both backends share the same SQLModel tables and repositories; they
differ in engine construction and in how a primary key violation is
recognised from the driver error.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from scanlink.db.base import DatabaseHealthCheck, create_engine_for, sqlite_url
from scanlink.db.session import SessionManager
from scanlink.models.scan import Scan, ScanRead
from scanlink.models.short_link import ShortLink, ShortLinkRead, ShortLinkSummary
from scanlink.repositories.base import ConstraintViolationError, RepositoryError
from scanlink.repositories.scan_repository import ScanRepository
from scanlink.repositories.short_link_repository import ShortLinkRepository
from scanlink.storage.base import Storage
from scanlink.storage.exceptions import (
    DuplicateIdError,
    StorageError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

TABLES = [ShortLink.__table__, Scan.__table__]


class SQLStorage(Storage):
    """
    Storage over an async SQLAlchemy engine.
    
    Each operation runs in its own short transaction. Driver and
    repository errors are translated into the storage exception
    hierarchy here, so services never see SQLAlchemy types.
    """
    
    backend_name = "sql"
    
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessions = SessionManager(engine)
        self.short_links = ShortLinkRepository()
        self.scans = ScanRepository()
    
    def is_duplicate_key(self, error: BaseException) -> bool:
        """Whether a driver integrity error is a primary key violation."""
        message = str(error).lower()
        return "unique" in message or "duplicate" in message
    
    def is_unavailable(self, error: BaseException) -> bool:
        if isinstance(error, (OperationalError, InterfaceError, OSError)):
            return True
        return isinstance(error, DBAPIError) and error.connection_invalidated
    
    def translate(self, error: BaseException, operation: str) -> StorageError:
        cause = error.__cause__ if isinstance(error, RepositoryError) and error.__cause__ else error
        if self.is_unavailable(cause):
            return StorageUnavailableError(f"{self.backend_name} storage unavailable during {operation}: {cause}")
        return StorageError(f"{self.backend_name} storage failed during {operation}: {cause}")
    
    @asynccontextmanager
    async def session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Transaction scope that converts failures into StorageError."""
        try:
            async with self.sessions.transaction_context() as db:
                yield db
        except StorageError:
            raise
        except (RepositoryError, SQLAlchemyError, OSError) as e:
            logger.error(f"Storage operation {operation} failed: {e}")
            raise self.translate(e, operation) from e
    
    async def initialize(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all, tables=TABLES)
        except (SQLAlchemyError, OSError) as e:
            raise self.translate(e, "initialize") from e
        logger.info(f"{self.backend_name} storage initialized")
    
    async def close(self) -> None:
        await self.engine.dispose()
    
    async def health_check(self) -> Dict[str, Any]:
        result = await DatabaseHealthCheck.check_connection(self.engine)
        result["backend"] = self.backend_name
        return result
    
    async def insert_short_link(
        self,
        id: str,
        original_url: str,
        style_options: Optional[Dict[str, Any]] = None,
    ) -> ShortLinkRead:
        async with self.session("insert_short_link") as db:
            try:
                link = await self.short_links.create_short_link(db, id, original_url, style_options)
            except ConstraintViolationError as e:
                if e.__cause__ is not None and self.is_duplicate_key(e.__cause__):
                    raise DuplicateIdError(id) from e
                raise
            return link.to_read()
    
    async def get_short_link(self, id: str) -> Optional[ShortLinkRead]:
        async with self.session("get_short_link") as db:
            link = await self.short_links.get_by_id(db, id)
            return link.to_read() if link else None
    
    async def insert_scan(
        self,
        qr_id: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> int:
        async with self.session("insert_scan") as db:
            scan = await self.scans.create_scan(db, qr_id, ip, user_agent)
            return scan.id
    
    async def count_scans(self, qr_id: str) -> int:
        async with self.session("count_scans") as db:
            return await self.scans.count_for_link(db, qr_id)
    
    async def count_distinct_ips(self, qr_id: str) -> int:
        async with self.session("count_distinct_ips") as db:
            return await self.scans.count_distinct_ips(db, qr_id)
    
    async def list_recent_scans(self, qr_id: str, limit: int) -> List[ScanRead]:
        async with self.session("list_recent_scans") as db:
            scans = await self.scans.get_recent_for_link(db, qr_id, limit)
            return [ScanRead.model_validate(scan, from_attributes=True) for scan in scans]
    
    async def list_short_links(self, limit: int = 50) -> List[ShortLinkSummary]:
        async with self.session("list_short_links") as db:
            return await self.short_links.list_with_scan_counts(db, limit)


class SQLiteStorage(SQLStorage):
    """
    Local embedded store backed by a SQLite file.
    
    Zero configuration; suited to development and single-node deployments.
    """
    
    backend_name = "sqlite"
    
    def __init__(self, path: str = "./scanlink.sqlite", engine: Optional[AsyncEngine] = None):
        self.path = str(path)
        super().__init__(engine or create_engine_for(sqlite_url(self.path)))
    
    def is_duplicate_key(self, error: BaseException) -> bool:
        return "unique constraint failed" in str(error).lower()


class PostgresStorage(SQLStorage):
    """Remote relational store backed by PostgreSQL through asyncpg."""
    
    backend_name = "postgres"
    
    UNIQUE_VIOLATION = "23505"
    
    def __init__(self, url: str, engine: Optional[AsyncEngine] = None):
        self.url = url
        super().__init__(engine or create_engine_for(url))
    
    def is_duplicate_key(self, error: BaseException) -> bool:
        orig = getattr(error, "orig", None)
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate is not None:
            return sqlstate == self.UNIQUE_VIOLATION
        return "duplicate key" in str(error).lower()
