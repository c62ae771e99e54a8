"""
Bot handlers registration.
"""

from aiogram import Dispatcher

from src.bot.handlers.start import router as start_router
from src.bot.handlers.cart import router as cart_router
from src.bot.handlers.platform import router as platform_router
from src.bot.handlers.chat import router as chat_router


def register_handlers(dp: Dispatcher) -> None:
    """Register all handlers to dispatcher."""
    # Order matters! Commands and buttons first, free text last
    dp.include_router(start_router)
    dp.include_router(cart_router)
    dp.include_router(platform_router)
    dp.include_router(chat_router)
