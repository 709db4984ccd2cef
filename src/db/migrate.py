"""Schema migrations for the sales database.

Each migration is a plain `.sql` file under `src/db/migrations/`; files run in filename order and
each one runs in its own transaction. The `schema_migrations` table records which files a database
has already seen, so re-running the command only applies new files.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import LiteralString, cast

import psycopg
from psycopg import sql

from src.config.logging import configure_logging
from src.db.connection import connect_utc, require_database_url

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# Dependents first.
_DATA_TABLES: tuple[str, ...] = ("sales", "customers", "products")

_CREATE_LEDGER = """
    CREATE TABLE IF NOT EXISTS schema_migrations
    (
        filename   TEXT PRIMARY KEY,
        applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


def list_migration_files(directory: Path = MIGRATIONS_DIR) -> list[Path]:
    """Migration files in the order they must be applied."""

    if not directory.is_dir():
        raise RuntimeError(f"Migrations directory does not exist: {directory}")

    files = sorted(directory.glob("*.sql"), key=lambda p: p.name)
    if not files:
        raise RuntimeError(f"No .sql migration files found in {directory}")
    return files


def _drop_everything(conn: psycopg.Connection) -> None:
    with conn.transaction():
        for table in (*_DATA_TABLES, "schema_migrations"):
            conn.execute(
                sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)),
                prepare=False,
            )


def pending_migrations(conn: psycopg.Connection, files: list[Path]) -> list[Path]:
    """Files from `files` that this database has not recorded yet."""

    conn.execute(_CREATE_LEDGER, prepare=False)
    seen = {row[0] for row in conn.execute("SELECT filename FROM schema_migrations", prepare=False)}
    return [f for f in files if f.name not in seen]


def _apply(conn: psycopg.Connection, migration: Path) -> None:
    with conn.transaction():
        conn.execute(cast(LiteralString, migration.read_text(encoding="utf-8")), prepare=False)
        conn.execute(
            "INSERT INTO schema_migrations (filename) VALUES (%s)",
            (migration.name,),
            prepare=False,
        )
    logger.info("applied migration %s", migration.name)


def migrate(*, recreate: bool = False, dry_run: bool = False) -> list[str]:
    """Bring the `DATABASE_URL` schema up to date.

    Returns the filenames that were applied (or, with `dry_run`, that would be applied).
    """

    files = list_migration_files()

    with connect_utc(require_database_url()) as conn:
        if recreate and not dry_run:
            logger.warning("dropping tables: %s", ", ".join(_DATA_TABLES))
            _drop_everything(conn)

        with conn.transaction():
            todo = pending_migrations(conn, files)

        if not dry_run:
            for migration in todo:
                _apply(conn, migration)

    return [m.name for m in todo]


def main() -> None:
    """CLI entry point for applying migrations."""

    parser = argparse.ArgumentParser(description="Apply SQL migrations to Postgres.")
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="Drop the sales tables and re-apply all migrations (destructive).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only list the migrations that would be applied.",
    )
    args = parser.parse_args()

    configure_logging()
    names = migrate(recreate=args.recreate, dry_run=args.dry_run)
    if not names:
        print("schema is up to date")
    for name in names:
        print(f"{'pending' if args.dry_run else 'applied'} {name}")


if __name__ == "__main__":
    main()
