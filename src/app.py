"""Application composition root.

This module wires together configuration, the DB pool and the query service for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from src.config.settings import Settings
from src.db.executor import PoolExecutor
from src.db.pool import create_pool
from src.query_service import QueryService


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    pool: AsyncConnectionPool
    executor: PoolExecutor
    service: QueryService


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The returned DB pool is not opened. Call `await app.pool.open()` at startup.
    """

    pool = create_pool(settings.database_url, timezone=settings.db_timezone, max_size=10)
    executor = PoolExecutor(pool)
    return App(settings=settings, pool=pool, executor=executor, service=QueryService(executor))
