"""Bot router composition."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import BotCommand

from src.bot.handlers import (
    handle_analyze,
    handle_explain,
    handle_help,
    handle_message,
    handle_schema,
    handle_validate,
)

# Shown in the Telegram command menu.
BOT_COMMANDS: list[BotCommand] = [
    BotCommand(command="analyze", description="Run a query and summarize the results"),
    BotCommand(command="explain", description="Show how a query would be interpreted"),
    BotCommand(command="validate", description="Check whether a query is supported"),
    BotCommand(command="schema", description="List the available tables"),
    BotCommand(command="help", description="Usage examples"),
]

router = Router(name="root")
router.message.register(handle_help, CommandStart())
router.message.register(handle_help, Command("help"))
router.message.register(handle_analyze, Command("analyze"))
router.message.register(handle_explain, Command("explain"))
router.message.register(handle_validate, Command("validate"))
router.message.register(handle_schema, Command("schema"))
# Catch-all: must stay last so commands are routed first.
router.message.register(handle_message)
