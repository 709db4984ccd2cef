"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

The DB session timezone is locked to UTC: relative period filters ("last month") are evaluated
against `CURRENT_DATE` and must not depend on where the database happens to run.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    database_url: str = Field(alias="DATABASE_URL")
    db_timezone: str = Field(default="UTC", alias="DB_TIMEZONE")

    # Comma-separated Telegram user ids; empty means the bot answers everyone.
    allowed_user_ids_raw: str = Field(default="", alias="ALLOWED_USER_IDS")
    analyze_by_default: bool = Field(default=False, alias="ANALYZE_BY_DEFAULT")
    max_reply_rows: int = Field(default=10, ge=1, alias="MAX_REPLY_ROWS")

    @field_validator("db_timezone")
    @classmethod
    def validate_db_timezone_is_utc(cls, value: str) -> str:
        """Validate that the DB timezone is locked to UTC."""

        if value.upper() != "UTC":
            raise ValueError("DB_TIMEZONE must be UTC")
        return "UTC"

    @field_validator("allowed_user_ids_raw")
    @classmethod
    def validate_allowed_user_ids(cls, value: str) -> str:
        """Validate that every allowlist entry is an integer Telegram user id."""

        for part in value.split(","):
            part = part.strip()
            if part and not part.lstrip("-").isdigit():
                raise ValueError(f"ALLOWED_USER_IDS entries must be integers, got {part!r}")
        return value

    @property
    def allowed_user_ids(self) -> frozenset[int]:
        return frozenset(int(p) for p in self.allowed_user_ids_raw.split(",") if p.strip())


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
