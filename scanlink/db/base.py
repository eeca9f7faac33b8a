"""Database base configuration for SQLAlchemy with SQLModel.

This module provides engine construction for both storage backends
and a health check usable against any engine:
- Engine configuration per environment
- Backend specific connect arguments
- Health check functionality
"""

from typing import Any, Dict
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text

from scanlink.core.config import settings

logger = logging.getLogger(__name__)

# Pool configuration for the remote relational store per environment
REMOTE_ENGINE_CONFIGS: Dict[str, Dict[str, Any]] = {
    "development": {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    },
    "production": {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    },
    "testing": {
        "poolclass": NullPool,  # Use NullPool for tests to avoid connection issues
    },
}


def get_remote_engine_config() -> Dict[str, Any]:
    """Get the pool configuration for the current environment."""
    env = settings.ENVIRONMENT.value
    return REMOTE_ENGINE_CONFIGS.get(env, REMOTE_ENGINE_CONFIGS["development"])


def sqlite_url(path: str) -> str:
    """Build an aiosqlite URL for a database file path (or ``:memory:``)."""
    return f"sqlite+aiosqlite:///{path}"


def create_engine_for(url: str) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine for ``url``.
    
    SQLite files get a NullPool so every operation opens its own
    connection; in-memory SQLite needs a StaticPool so all sessions
    see the same database.
    
    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    if url.startswith("sqlite"):
        if ":memory:" in url:
            engine_config = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        else:
            engine_config = {
                "poolclass": NullPool,
                "connect_args": {"check_same_thread": False, "timeout": 30},
            }
    else:
        engine_config = get_remote_engine_config()
    
    logger.info(f"Creating database engine for {url.split('@')[-1]}")
    
    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        **engine_config,
    )


class DatabaseHealthCheck:
    """Health check functionality for a database engine."""
    
    @staticmethod
    async def check_connection(engine: AsyncEngine) -> Dict[str, Any]:
        """Check database connectivity and return status.
        
        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0
        
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")
        
        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
