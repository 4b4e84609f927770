# pgschema/services/database.py
"""Database connection services."""

import logging
from typing import Any, Mapping, Protocol, Sequence

import asyncpg

logger = logging.getLogger("database")


class RowSource(Protocol):
    """Executes read-only catalog queries."""

    async def fetch(self, query: str, *args: Any) -> Sequence[Mapping[str, Any]]:
        """Run a query and return all of its rows."""
        ...

    async def fetchval(self, query: str, *args: Any) -> Any:
        """Run a query and return the first column of the first row."""
        ...


class PoolRowSource:
    """RowSource backed by an asyncpg connection pool.

    Every call holds one pooled connection for exactly one query and gives
    it back before returning, also when the query fails.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        async with self.pool.acquire() as conn:
            return await conn.fetch(query, *args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        async with self.pool.acquire() as conn:
            return await conn.fetchval(query, *args)


async def create_pool(
    dsn: str,
    min_size: int = 1,
    max_size: int = 5,
    ssl: bool = False,
    timeout: int = 30
) -> asyncpg.Pool:
    """Create a PostgreSQL connection pool.

    Args:
        dsn: Database connection string.
        min_size: Minimum pool size.
        max_size: Maximum pool size.
        ssl: Whether to use SSL.
        timeout: Command timeout in seconds.

    Returns:
        An asyncpg connection pool.
    """
    pool = await asyncpg.create_pool(
        dsn=dsn,
        min_size=min_size,
        max_size=max_size,
        ssl=ssl if ssl else None,
        command_timeout=timeout
    )
    logger.info("Connection pool created: min=%d, max=%d", min_size, max_size)
    return pool


async def close_pool(pool: asyncpg.Pool) -> None:
    """Close a connection pool.

    Args:
        pool: The connection pool to close.
    """
    await pool.close()
    logger.info("Connection pool closed")
