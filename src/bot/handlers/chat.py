"""
Message handler - free-text conversation with the shopping assistant.
"""

import logging

from aiogram import F, Router
from aiogram.types import Message

from src.bot.observer import TelegramObserver
from src.config import settings
from src.core.assistant import get_assistant

router = Router(name="chat")
logger = logging.getLogger(__name__)


@router.message(F.text)
async def handle_message(message: Message) -> None:
    """
    Handle user messages.
    Replies are sent by the observer as the assistant produces them.
    """
    text = message.text.strip()

    if not text:
        return

    assistant = get_assistant()
    session = assistant.sessions.get(message.from_user.id)
    observer = TelegramObserver(message, settings.operator_chat_id)

    try:
        await assistant.handle_message(session, text, observer)
    except Exception as e:
        logger.error(f"Error handling message from {message.from_user.id}: {e}", exc_info=True)
        await message.answer(
            "😔 Sorry, something went wrong while processing your message. Please try again."
        )
