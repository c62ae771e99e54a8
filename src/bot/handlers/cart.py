"""
Cart handlers: view, clear and remove lines.
"""

import logging

from aiogram import F, Router, html
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from src.bot.keyboards.cart import (
    MY_CART_BUTTON,
    REMOVE_ITEM_PREFIX,
    get_cart_keyboard,
    get_main_keyboard,
)
from src.bot.observer import TelegramObserver
from src.config import settings
from src.core.assistant import get_assistant
from src.core.cart.models import Cart

router = Router(name="cart")
logger = logging.getLogger(__name__)


EMPTY_CART_MESSAGE = "🛒 Your cart is empty. Ask me to add something!"
STALE_ITEM_MESSAGE = "This item is no longer in your cart"


def format_cart_message(cart: Cart, platform: str) -> str:
    """Cart summary for the chat."""
    return (
        f"🛒 <b>Your cart</b> ({html.quote(platform)})\n\n"
        f"{html.quote(cart.format_summary())}\n\n"
        f"<b>Total:</b> {cart.total_quantity} pcs\n\n"
        f"<i>Tap an item to remove it from this list.</i>"
    )


# =============================================================================
# VIEW
# =============================================================================

@router.message(Command("cart"))
@router.message(F.text == MY_CART_BUTTON)
async def show_cart(message: Message) -> None:
    """Show the cart of the user."""
    assistant = get_assistant()
    session = assistant.sessions.get(message.from_user.id)

    if session.cart.is_empty:
        await message.answer(EMPTY_CART_MESSAGE, reply_markup=get_main_keyboard())
        return

    platform = assistant.connection.active_platform
    cart_url = await assistant.cart_page_url(platform)

    await message.answer(
        format_cart_message(session.cart, platform),
        reply_markup=get_cart_keyboard(session.cart, cart_url),
    )


# =============================================================================
# CLEAR
# =============================================================================

@router.message(Command("clear"))
async def handle_clear(message: Message) -> None:
    """Empty the cart."""
    assistant = get_assistant()
    session = assistant.sessions.get(message.from_user.id)

    await assistant.clear_cart(session, TelegramObserver(message, settings.operator_chat_id))


# =============================================================================
# REMOVE
# =============================================================================

@router.callback_query(F.data.startswith(REMOVE_ITEM_PREFIX))
async def handle_remove(callback: CallbackQuery) -> None:
    """Remove one line from the cart list."""
    assistant = get_assistant()
    session = assistant.sessions.get(callback.from_user.id)
    product_id = callback.data[len(REMOVE_ITEM_PREFIX):]

    observer = TelegramObserver(callback.message, settings.operator_chat_id)
    if not await assistant.remove_item(session, product_id, observer):
        await callback.answer(STALE_ITEM_MESSAGE, show_alert=True)
        return

    await callback.answer()

    # Refresh the list in place
    try:
        if session.cart.is_empty:
            await callback.message.edit_text(EMPTY_CART_MESSAGE)
        else:
            platform = assistant.connection.active_platform
            cart_url = await assistant.cart_page_url(platform)
            await callback.message.edit_text(
                format_cart_message(session.cart, platform),
                reply_markup=get_cart_keyboard(session.cart, cart_url),
            )
    except TelegramBadRequest as e:
        logger.debug(f"Cart message not refreshed: {e}")


# =============================================================================
# ERROR REPORTS
# =============================================================================

@router.callback_query(F.data == "diag:dismiss")
async def dismiss_report(callback: CallbackQuery) -> None:
    """Delete an error report message."""
    await callback.answer()
    try:
        await callback.message.delete()
    except TelegramBadRequest as e:
        logger.debug(f"Error report not deleted: {e}")
