"""
Delivers session output to a Telegram chat.
"""

import json
import logging
from typing import Any, Optional

from aiogram import html
from aiogram.exceptions import TelegramAPIError
from aiogram.types import Message

from src.bot.keyboards.cart import get_dismiss_keyboard, get_link_keyboard
from src.core.chat.log import ConversationEntry, Speaker
from src.core.chat.session import ErrorReport, SessionObserver

logger = logging.getLogger(__name__)

# Telegram caps messages at 4096 characters
MAX_DETAILS_LENGTH = 3000


def format_details(raw_details: Any) -> str:
    """Pretty-print raw error details."""
    if isinstance(raw_details, str):
        text = raw_details
    else:
        try:
            text = json.dumps(raw_details, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            text = repr(raw_details)

    if len(text) > MAX_DETAILS_LENGTH:
        text = text[:MAX_DETAILS_LENGTH] + "\n..."
    return text


def format_error_report(report: ErrorReport) -> str:
    """Render an error report as HTML."""
    text = f"⚠️ <b>{html.quote(report.title)}</b>\n\n{html.quote(report.message)}"
    if report.raw_details is not None:
        text += f"\n\n<pre>{html.quote(format_details(report.raw_details))}</pre>"
    return text


class TelegramObserver(SessionObserver):
    """Sends bot entries as chat messages and error reports as separate notices."""

    def __init__(self, message: Message, operator_chat_id: Optional[int] = None):
        self.message = message
        self.operator_chat_id = operator_chat_id

    async def on_entry(self, entry: ConversationEntry) -> None:
        # The user's own text is already in the chat
        if entry.speaker != Speaker.BOT:
            return

        markup = get_link_keyboard(entry.link) if entry.link else None
        await self.message.answer(html.quote(entry.text), reply_markup=markup)

        if entry.interim:
            await self.message.bot.send_chat_action(
                chat_id=self.message.chat.id,
                action="typing",
            )

    async def on_error_report(self, report: ErrorReport) -> None:
        text = format_error_report(report)
        await self.message.answer(text, reply_markup=get_dismiss_keyboard())

        if self.operator_chat_id and self.operator_chat_id != self.message.chat.id:
            try:
                await self.message.bot.send_message(self.operator_chat_id, text)
            except TelegramAPIError as e:
                logger.warning(f"Failed to forward error report to operator: {e}")
