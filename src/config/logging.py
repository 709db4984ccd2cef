"""Logging configuration for the bot service."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    Logs are internal diagnostics only; generated SQL and driver errors are logged here rather than
    echoed in full to chat users.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # Reduce noisy third-party logs by default.
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
