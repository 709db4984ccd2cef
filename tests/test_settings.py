"""Tests for environment settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config.settings import Settings, load_settings


@pytest.fixture
def base_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    # Keep a developer's local `.env` out of the picture.
    monkeypatch.chdir(tmp_path)
    for name in ("DB_TIMEZONE", "ALLOWED_USER_IDS", "ANALYZE_BY_DEFAULT", "MAX_REPLY_ROWS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/sales")
    return monkeypatch


def test_defaults(base_env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)

    assert settings.db_timezone == "UTC"
    assert settings.allowed_user_ids == frozenset()
    assert settings.analyze_by_default is False
    assert settings.max_reply_rows == 10


def test_overrides(base_env: pytest.MonkeyPatch) -> None:
    base_env.setenv("DB_TIMEZONE", "utc")
    base_env.setenv("ALLOWED_USER_IDS", " 1, 22 ,333,")
    base_env.setenv("ANALYZE_BY_DEFAULT", "true")
    base_env.setenv("MAX_REPLY_ROWS", "3")

    settings = Settings(_env_file=None)

    assert settings.db_timezone == "UTC"
    assert settings.allowed_user_ids == frozenset({1, 22, 333})
    assert settings.analyze_by_default is True
    assert settings.max_reply_rows == 3


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DB_TIMEZONE", "Europe/Berlin"),
        ("ALLOWED_USER_IDS", "1,alice"),
        ("MAX_REPLY_ROWS", "0"),
    ],
)
def test_invalid_values_fail_loading(base_env: pytest.MonkeyPatch, name: str, value: str) -> None:
    base_env.setenv(name, value)

    with pytest.raises(RuntimeError, match="Invalid environment configuration"):
        load_settings()


def test_missing_token_fails_loading(base_env: pytest.MonkeyPatch) -> None:
    base_env.delenv("TELEGRAM_BOT_TOKEN")

    with pytest.raises(RuntimeError):
        load_settings()
