"""Access control for incoming updates.

Only Telegram users on the configured allowlist reach the handlers. An empty allowlist leaves the
bot open. Access control never influences how a request is translated.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

logger = logging.getLogger(__name__)

ACCESS_DENIED_REPLY = "Access denied."


def is_allowed(user_id: int | None, allowed_user_ids: frozenset[int]) -> bool:
    if not allowed_user_ids:
        return True
    return user_id is not None and user_id in allowed_user_ids


class AccessMiddleware(BaseMiddleware):
    """Outer message middleware that drops updates from users off the allowlist."""

    def __init__(self, allowed_user_ids: frozenset[int]) -> None:
        self.allowed_user_ids = allowed_user_ids

    async def __call__(
            self,
            handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
            event: TelegramObject,
            data: dict[str, Any],
    ) -> Any:
        if isinstance(event, Message):
            user_id = event.from_user.id if event.from_user else None
            if not is_allowed(user_id, self.allowed_user_ids):
                logger.info("access denied user_id=%s", user_id)
                await event.answer(ACCESS_DENIED_REPLY)
                return None
        return await handler(event, data)
