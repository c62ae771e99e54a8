"""
Keyboards for the shopping chat.
"""

from typing import Optional

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)
from aiogram.utils.keyboard import InlineKeyboardBuilder

from src.core.cart.models import Cart

MY_CART_BUTTON = "🛒 My cart"
SWITCH_STORE_BUTTON = "🔄 Switch store"

REMOVE_ITEM_PREFIX = "cart:remove:"
MAX_CALLBACK_DATA = 64


def get_main_keyboard() -> ReplyKeyboardMarkup:
    """Persistent keyboard with the main actions."""
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=MY_CART_BUTTON), KeyboardButton(text=SWITCH_STORE_BUTTON)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Ask me to add products to your cart...",
    )


def get_cart_keyboard(cart: Cart, cart_url: Optional[str]) -> InlineKeyboardMarkup:
    """Remove buttons per line plus the retailer cart link."""
    builder = InlineKeyboardBuilder()

    for line in cart.lines:
        callback_data = f"{REMOVE_ITEM_PREFIX}{line.product_id}"
        # Telegram limit; such lines can still be cleared with /clear
        if len(callback_data.encode()) > MAX_CALLBACK_DATA:
            continue
        name = line.product_name if len(line.product_name) <= 24 else f"{line.product_name[:24]}..."
        builder.row(
            InlineKeyboardButton(text=f"🗑️ {name}", callback_data=callback_data),
        )

    # Only offered when there is something to look at
    if cart_url and not cart.is_empty:
        builder.row(InlineKeyboardButton(text="🛍️ Open my cart", url=cart_url))

    return builder.as_markup()


def get_link_keyboard(url: str, text: str = "🛍️ Open cart page") -> InlineKeyboardMarkup:
    """Single URL button."""
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text=text, url=url))
    return builder.as_markup()


def get_platform_keyboard(platforms: list[str], current: str) -> InlineKeyboardMarkup:
    """Store picker."""
    builder = InlineKeyboardBuilder()
    for platform in platforms:
        mark = "✅ " if platform == current else ""
        builder.row(
            InlineKeyboardButton(text=f"{mark}{platform.capitalize()}", callback_data=f"platform:{platform}"),
        )
    return builder.as_markup()


def get_dismiss_keyboard() -> InlineKeyboardMarkup:
    """Dismiss button for error reports."""
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="✖️ Dismiss", callback_data="diag:dismiss"))
    return builder.as_markup()
