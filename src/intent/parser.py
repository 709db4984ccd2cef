"""Translator entry points: translate, explain and validate.

All three are pure functions of the input text. Failures are returned as data on the `Intent`
(`unrecognized` or `error` category), never raised.
"""

from __future__ import annotations

import logging

from src.intent.rules_parser import ERROR_INTENT, match_rule
from src.intent.schema import Intent, QueryExplanation, QueryValidation

logger = logging.getLogger(__name__)

VALID_FEEDBACK = "This query can be processed."
INVALID_FEEDBACK = "This query cannot be processed. Please try a different format or topic."


def translate(text: str) -> Intent:
    """Translate a natural-language request into an `Intent`."""

    matched = match_rule(text)
    if matched is None:
        # The fallback rule matches everything; this only guards against a broken rule table.
        logger.error("no rule matched")
        return ERROR_INTENT

    rule, groups = matched
    try:
        intent = rule.builder(groups)
    except ValueError:
        logger.exception("rule=%s failed to build an intent", rule.name)
        return ERROR_INTENT

    logger.debug("matched rule=%s category=%s", rule.name, intent.category)
    return intent


def explain_query(text: str) -> QueryExplanation:
    """Describe how the text would be interpreted, without executing it."""

    intent = translate(text)
    return QueryExplanation(
        original_query=text,
        interpreted_as=intent.category,
        parameters=dict(intent.parameters),
        explanation=intent.explanation,
        query_text=intent.query_text,
    )


def validate_query(text: str) -> QueryValidation:
    """Report whether the text maps onto a supported category."""

    intent = translate(text)
    valid = intent.is_valid
    return QueryValidation(
        valid=valid,
        category=intent.category,
        supported_features=list(intent.parameters) if valid else [],
        feedback=VALID_FEEDBACK if valid else INVALID_FEEDBACK,
    )
