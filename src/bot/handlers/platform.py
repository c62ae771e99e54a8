"""
Store selection handlers.
"""

import logging

from aiogram import F, Router, html
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from src.bot.keyboards.cart import SWITCH_STORE_BUTTON, get_platform_keyboard
from src.bot.observer import TelegramObserver
from src.config import settings
from src.core.assistant import get_assistant

router = Router(name="platform")
logger = logging.getLogger(__name__)


@router.message(Command("platform"))
@router.message(F.text == SWITCH_STORE_BUTTON)
async def choose_platform(message: Message) -> None:
    """Show the store picker."""
    current = get_assistant().connection.active_platform
    await message.answer(
        f"🏬 You're shopping at <b>{html.quote(current)}</b>.\n\nChoose a store:",
        reply_markup=get_platform_keyboard(settings.platforms, current),
    )


@router.callback_query(F.data.startswith("platform:"))
async def handle_platform_selected(callback: CallbackQuery) -> None:
    """Switch to the chosen store."""
    platform = callback.data.split(":", 1)[1]

    if platform not in settings.platforms:
        await callback.answer("Unknown store", show_alert=True)
        return

    assistant = get_assistant()
    if platform == assistant.connection.active_platform:
        await callback.answer(f"Already shopping at {platform}")
        return

    await callback.answer()
    session = assistant.sessions.get(callback.from_user.id)
    observer = TelegramObserver(callback.message, settings.operator_chat_id)

    switched = await assistant.switch_platform(session, platform, observer)
    if switched:
        logger.info(f"User {callback.from_user.id} switched store to {platform}")
