"""DB query helpers.

Generated statements are fully rendered by the SQL builder (values are quoted literals), so they
are executed without bound parameters. Rows are returned as plain dicts keyed by column name.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, LiteralString, cast

from psycopg import AsyncConnection
from psycopg.rows import dict_row


class QueryExecutionError(RuntimeError):
    """Raised when the database rejects or fails to run a generated statement."""


async def fetch_rows(conn: AsyncConnection, sql: str) -> list[dict[str, Any]]:
    """Execute a statement and return all rows as dicts.

    Contract:
        - Returns an empty list when the statement yields no rows.
        - DB errors are not swallowed (caller decides how to handle them).
    """

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(cast(LiteralString, sql))
        return await cur.fetchall()


async def fetch_table_columns(
        conn: AsyncConnection,
        tables: Sequence[str],
) -> dict[str, list[dict[str, Any]]]:
    """Return the column layout of the given tables in the current search path."""

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT table_name, column_name, data_type, is_nullable
            FROM information_schema.columns
            WHERE table_schema = current_schema()
              AND table_name = ANY (%s)
            ORDER BY table_name, ordinal_position
            """,
            (list(tables),),
        )
        rows = await cur.fetchall()

    layout: dict[str, list[dict[str, Any]]] = {table: [] for table in tables}
    for row in rows:
        layout[row["table_name"]].append(
            {
                "name": row["column_name"],
                "type": row["data_type"],
                "nullable": row["is_nullable"] == "YES",
            }
        )
    return layout
