# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: Provide the connection pool the database probe checks against
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages async PostgreSQL connections using psycopg3 and psycopg_pool.
One pool per application: created with the app, opened and closed by the
FastAPI lifespan handler.

The pool opens without waiting for connections, so the service starts
(and /health answers) even when the database is down; the database probe
then reports it as unhealthy.

Usage:
    from repositories.database import create_pool, open_pool

    pool = create_pool(settings.database)
    await open_pool()
    async with pool.connection() as conn:
        await conn.execute("SELECT 1")
"""

import logging
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.config import DatabaseDefaults

logger = logging.getLogger(__name__)

# Global pool instance
_pool: Optional[AsyncConnectionPool] = None


def create_pool(settings: DatabaseDefaults) -> AsyncConnectionPool:
    """
    Create the global connection pool without opening it.

    Args:
        settings: Database settings (connection string and pool bounds)

    Returns:
        AsyncConnectionPool instance
    """
    global _pool

    if _pool is not None:
        logger.warning("Pool already created, returning existing pool")
        return _pool

    logger.info(f"Creating connection pool: {settings.safe_target}")

    _pool = AsyncConnectionPool(
        conninfo=settings.connection_string,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,  # Opened by the lifespan handler
    )
    return _pool


async def open_pool() -> None:
    """Open the global pool without waiting for the first connections."""
    if _pool is None:
        raise RuntimeError("create_pool() must be called before open_pool()")

    await _pool.open(wait=False)
    logger.info(f"Connection pool opened (min={_pool.min_size}, max={_pool.max_size})")


def get_pool() -> Optional[AsyncConnectionPool]:
    """Get the global connection pool, None before create_pool()."""
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Connection pool closed")


__all__ = [
    "create_pool",
    "open_pool",
    "get_pool",
    "close_pool",
]
