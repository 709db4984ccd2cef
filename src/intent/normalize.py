"""Text normalization for deterministic rule matching."""

from __future__ import annotations

_TRAILING_PUNCTUATION = "?!."


def normalize_text(text: str) -> str:
    """Normalize user text for rule matching.

    Only case is folded. Surrounding whitespace is kept: rules are searched in the text as the user
    sent it, so a trailing space can still complete a pattern.
    """

    return (text or "").lower()


def clean_capture(value: str | None) -> str:
    """Clean a captured phrase: trim whitespace and trailing sentence punctuation."""

    return (value or "").strip().rstrip(_TRAILING_PUNCTUATION).strip()
