"""Load a sales dataset JSON file into Postgres.

The dataset is a JSON object with three top-level lists: `products`, `sales` and `customers`
(see `fixtures/sample_dataset.json`, which reproduces the demo data the service ships with).
Rows are upserted by `id`, then identity sequences are moved past the loaded ids.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any
from urllib.request import urlopen

import psycopg
from psycopg import sql

from src.db.connection import connect_utc, require_database_url
from src.db.dataset_rows import DATASET_TABLES, iter_dataset_rows

SAMPLE_DATASET_PATH = Path(__file__).resolve().parent / "fixtures" / "sample_dataset.json"


def _load_json_bytes(*, path: str | None, url: str | None, sample: bool) -> bytes:
    if sum((bool(path), bool(url), sample)) != 1:
        raise ValueError("Exactly one of --path, --url or --sample must be provided")

    if sample:
        return SAMPLE_DATASET_PATH.read_bytes()
    if path:
        return Path(path).read_bytes()

    assert url is not None
    with urlopen(url) as resp:  # noqa: S310 (controlled URL from CLI)
        return resp.read()


def validate_payload(payload: Any) -> dict[str, Any]:
    """Check the top-level dataset shape; raise `ValueError` otherwise."""

    if not isinstance(payload, dict) or any(
            not isinstance(payload.get(table), list) for table in DATASET_TABLES
    ):
        raise ValueError(
            "Unexpected dataset format: expected object with list keys "
            + ", ".join(f"'{t}'" for t in DATASET_TABLES)
        )
    return payload


def upsert_statement(table: str) -> sql.Composed:
    """`INSERT ... ON CONFLICT (id) DO UPDATE` for one dataset table."""

    columns = DATASET_TABLES[table]
    return sql.SQL(
        "INSERT INTO {table} ({columns}) VALUES ({values}) ON CONFLICT (id) DO UPDATE SET {updates}"
    ).format(
        table=sql.Identifier(table),
        columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
        values=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        updates=sql.SQL(", ").join(
            sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c)) for c in columns[1:]
        ),
    )


def insert_dataset(conn: psycopg.Connection, payload: dict[str, Any], *, truncate: bool) -> None:
    """Write the dataset inside the caller's transaction."""

    with conn.cursor() as cur:
        if truncate:
            cur.execute("TRUNCATE sales, customers, products RESTART IDENTITY", prepare=False)

        for table, rows in iter_dataset_rows(payload):
            if not rows:
                continue
            cur.executemany(upsert_statement(table), rows)
            cur.execute(
                sql.SQL(
                    "SELECT setval(pg_get_serial_sequence({name}, 'id'), MAX(id)) FROM {table}"
                ).format(name=sql.Literal(table), table=sql.Identifier(table)),
                prepare=False,
            )


def load_dataset(*, path: str | None, url: str | None, sample: bool, truncate: bool) -> None:
    """Load the dataset into the `products`, `sales` and `customers` tables."""

    database_url = require_database_url()
    payload = validate_payload(json.loads(_load_json_bytes(path=path, url=url, sample=sample)))

    with connect_utc(database_url) as conn:
        with conn.transaction():
            insert_dataset(conn, payload, truncate=truncate)


def main() -> None:
    """CLI entry point for loading a dataset into Postgres."""

    parser = argparse.ArgumentParser(description="Load a sales dataset JSON file into Postgres.")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--path", help="Path to the dataset JSON file.")
    src.add_argument("--url", help="URL to download the dataset JSON.")
    src.add_argument("--sample", action="store_true", help="Load the bundled sample dataset.")
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="TRUNCATE target tables before loading (destructive).",
    )
    args = parser.parse_args()

    load_dataset(path=args.path, url=args.url, sample=args.sample, truncate=args.truncate)


if __name__ == "__main__":
    main()
