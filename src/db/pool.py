"""Async Postgres connection pool.

The query pipeline borrows connections from an async pool (psycopg3). Every pooled connection is
opened with the session timezone pinned to UTC.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from src.db.connection import SESSION_TIMEZONE, require_database_url, session_options


def create_pool(
        database_url: str | None = None,
        *,
        timezone: str = SESSION_TIMEZONE,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create an async DB pool.

    Notes:
        - The returned pool is created with `open=False`. Call `await pool.open()` at startup.
        - If `database_url` is omitted, it is read from `.env`/`DATABASE_URL`.
    """

    if database_url is None:
        database_url = require_database_url()

    return AsyncConnectionPool(
        conninfo=database_url,
        kwargs={"options": session_options(timezone)},
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Borrow a connection; the pool commits on clean exit and rolls back on error."""

    async with pool.connection() as conn:
        yield conn
