"""Telegram notification adapter — implements NotificationPort.

Wraps a telegram.Bot instance so the weekly reminder can push to a chat
without knowing about python-telegram-bot.
"""

from __future__ import annotations

import logging

from telegram import Bot

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Telegram implementation of NotificationPort."""

    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_message(self, chat_id: int | str, text: str) -> None:
        logger.debug("Sending %d chars to chat %s", len(text), chat_id)
        await self._bot.send_message(chat_id=chat_id, text=text)
