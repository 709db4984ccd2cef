"""Incoming request text validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

MIN_QUERY_LENGTH = 3
MAX_QUERY_LENGTH = 500


class InvalidQueryText(ValueError):
    """Raised when the request text is outside the accepted shape."""


class QueryRequest(BaseModel):
    """A natural-language request as accepted from chat."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    query: str = Field(min_length=MIN_QUERY_LENGTH, max_length=MAX_QUERY_LENGTH)


def parse_query_text(raw: str | None) -> str:
    """Return the trimmed request text, or raise `InvalidQueryText` with a user-facing reason."""

    try:
        return QueryRequest(query=raw or "").query
    except ValidationError as exc:
        raise InvalidQueryText(
            f"Please send a query between {MIN_QUERY_LENGTH} and {MAX_QUERY_LENGTH} characters."
        ) from exc
