"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
"""

from typing import AsyncGenerator
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SessionManager:
    """Session manager bound to one engine.
    
    Provides a higher-level API for session management with automatic
    transaction handling.
    """
    
    def __init__(self, engine: AsyncEngine):
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    
    @asynccontextmanager
    async def transaction_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for a database session with transaction support.
        
        Automatically commits on successful completion or rolls back on error.
        
        Yields:
            AsyncSession: SQLAlchemy async session
            
        Example:
            ```python
            async with manager.transaction_context() as session:
                session.add(ShortLink(id="a1B2c3D4", original_url="https://example.com"))
                # Commits automatically on context exit if no errors
            ```
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
