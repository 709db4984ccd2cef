"""Pool-backed executor for generated statements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from src.db.pool import get_conn
from src.db.query import QueryExecutionError, fetch_rows, fetch_table_columns
from src.sql.columns import SCHEMA_TABLES


@dataclass(frozen=True)
class PoolExecutor:
    """Runs statements on connections borrowed from an async pool."""

    pool: AsyncConnectionPool

    async def __call__(self, sql: str) -> list[dict[str, Any]]:
        try:
            async with get_conn(self.pool) as conn:
                return await fetch_rows(conn, sql)
        except psycopg.Error as exc:
            raise QueryExecutionError(str(exc)) from exc

    async def schema(self) -> dict[str, list[dict[str, Any]]]:
        """Column layout of the tables the translator queries."""

        try:
            async with get_conn(self.pool) as conn:
                return await fetch_table_columns(conn, SCHEMA_TABLES)
        except psycopg.Error as exc:
            raise QueryExecutionError(str(exc)) from exc
