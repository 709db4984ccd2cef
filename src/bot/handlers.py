"""aiogram message handlers.

Contract: every incoming message produces exactly one plain-text reply. Unsupported phrasing gets
the service's explanation of what went wrong; internal errors are logged and answered with a
generic failure text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from aiogram.filters import CommandObject
from aiogram.types import Message

from src.app import App
from src.bot.formatting import render_explanation, render_result, render_schema, render_validation
from src.bot.validation import InvalidQueryText, parse_query_text

logger = logging.getLogger(__name__)

FAILURE_REPLY = "Something went wrong while processing your query. Please try again later."
UNKNOWN_COMMAND_REPLY = "Unknown command. Send /help to see what I can do."

HELP_TEXT = (
    "Ask about sales, inventory, revenue, top products or customers, for example:\n"
    "- Show me sales from last month\n"
    "- How many laptops do we have in stock?\n"
    "- What are the top 5 selling products\n"
    "- What is the total revenue in march\n"
    "- Who are the customers in New York\n"
    "\n"
    "/analyze <query> - run the query and summarize the results\n"
    "/explain <query> - show how the query would be interpreted\n"
    "/validate <query> - check whether the query is supported\n"
    "/schema - list the available tables"
)


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


async def _answer_query(message: Message, raw_text: str | None, app: App, *, analyze: bool) -> None:
    reply = FAILURE_REPLY

    # noinspection PyBroadException
    try:
        text = parse_query_text(raw_text)
        result = await app.service.process_query(text, analyze=analyze)
        reply = render_result(result, max_rows=app.settings.max_reply_rows)
    except InvalidQueryText as exc:
        reply = str(exc)
    except Exception:
        # Handler boundary: the user always gets exactly one reply.
        logger.exception("query handler failed")

    await message.answer(reply)


async def _answer_translation(
        message: Message,
        raw_text: str | None,
        render: Callable[[str], str],
) -> None:
    reply = FAILURE_REPLY

    # noinspection PyBroadException
    try:
        reply = render(parse_query_text(raw_text))
    except InvalidQueryText as exc:
        reply = str(exc)
    except Exception:
        logger.exception("translation handler failed")

    await message.answer(reply)


async def handle_help(message: Message) -> None:
    """Reply with usage examples."""

    await message.answer(HELP_TEXT)


async def handle_explain(message: Message, command: CommandObject, app: App) -> None:
    """Show how a query would be interpreted, without executing it."""

    await _answer_translation(
        message,
        command.args,
        lambda text: render_explanation(app.service.explain(text)),
    )


async def handle_validate(message: Message, command: CommandObject, app: App) -> None:
    """Report whether a query is supported, without executing it."""

    await _answer_translation(
        message,
        command.args,
        lambda text: render_validation(app.service.validate(text)),
    )


async def handle_analyze(message: Message, command: CommandObject, app: App) -> None:
    """Run a query and include the analysis in the reply."""

    await _answer_query(message, command.args, app, analyze=True)


async def handle_schema(message: Message, app: App) -> None:
    """List the tables and columns queries run against."""

    reply = FAILURE_REPLY

    # noinspection PyBroadException
    try:
        reply = render_schema(await app.executor.schema())
    except Exception:
        logger.exception("schema lookup failed")

    await message.answer(reply)


async def handle_message(message: Message, app: App) -> None:
    """Handle any plain-text message as a natural-language query."""

    raw_text = message.text or message.caption or ""
    if _is_command_text(raw_text):
        await message.answer(UNKNOWN_COMMAND_REPLY)
        return

    await _answer_query(message, raw_text, app, analyze=app.settings.analyze_by_default)
