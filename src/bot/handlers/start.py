"""
Start, help and status command handlers.
"""

from aiogram import Router, html
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from src.bot.keyboards.cart import MY_CART_BUTTON, SWITCH_STORE_BUTTON, get_main_keyboard
from src.core.assistant import get_assistant
from src.core.chat import replies
from src.core.connectivity.state import ConnectionState

router = Router(name="start")


WELCOME_MESSAGE = f"""👋 <b>{replies.WELCOME}</b>

<b>How to talk to me:</b>
• «Add winter tires to my cart»
• «Add 2 bottles of motor oil»
• «Add motor oil product id 59-5064»

<b>🔘 Buttons:</b>
• «{MY_CART_BUTTON}» — what I've added so far
• «{SWITCH_STORE_BUTTON}» — choose another store

<b>Commands:</b>
/cart — show your cart
/clear — empty your cart
/platform — switch store
/status — connection status
/help — this help"""


HELP_MESSAGE = f"""🤖 <b>How I can help:</b>

{replies.HELP}

<b>Cart:</b>
• /cart — show what I've added and open the store cart
• /clear or «clear my cart» — start over

<b>Store:</b>
• /platform — pick the store to shop at
• /status — check the connection to the store

💡 <i>If an item can't be added, I'll say so and link you to the store cart page.</i>"""


STATUS_ICONS = {
    "connected": "🟢",
    "disconnected": "🔴",
    "unknown": "⚪",
}


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    """Handle /start command."""
    await message.answer(WELCOME_MESSAGE, reply_markup=get_main_keyboard())


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_MESSAGE, reply_markup=get_main_keyboard())


def format_status(state: ConnectionState) -> str:
    """Connection status for the chat."""
    icon = STATUS_ICONS.get(state.status.value, "⚪")

    text = (
        f"{icon} <b>{html.quote(state.status_text)}</b>\n\n"
        f"🏬 Store: <b>{html.quote(state.active_platform)}</b>"
    )
    if state.retry_count:
        text += f"\n🔁 Retries: {state.retry_count}"
    return text


@router.message(Command("status"))
async def handle_status(message: Message) -> None:
    """Show connection status and active store."""
    await message.answer(format_status(get_assistant().connection))
