"""Shared Postgres connection helpers.

The session timezone is pinned at connection startup (libpq `options`), because relative period
filters compare against `CURRENT_DATE`.
"""

from __future__ import annotations

import os

import psycopg
from dotenv import load_dotenv

SESSION_TIMEZONE = "UTC"


def session_options(timezone: str = SESSION_TIMEZONE) -> str:
    """libpq `options` value that sets the session timezone."""

    return f"-c TimeZone={timezone}"


def require_database_url() -> str:
    """Read `DATABASE_URL` from `.env`/the environment or raise a clear error."""

    load_dotenv(".env")
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required (set it in .env or environment)")
    return database_url


def connect_utc(database_url: str) -> psycopg.Connection:
    """Open a synchronous connection whose session timezone is UTC (used by the CLI tools)."""

    return psycopg.connect(database_url, options=session_options())
