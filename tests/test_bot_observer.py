"""Tests for Telegram delivery of session output."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bot.observer import MAX_DETAILS_LENGTH, TelegramObserver, format_details, format_error_report
from src.core.chat.log import ConversationEntry, Speaker
from src.core.chat.session import ErrorReport


def make_message(chat_id: int = 100) -> MagicMock:
    message = MagicMock()
    message.chat.id = chat_id
    message.answer = AsyncMock()
    message.bot.send_chat_action = AsyncMock()
    message.bot.send_message = AsyncMock()
    return message


class TestFormatting:
    def test_report_escapes_html(self):
        text = format_error_report(ErrorReport(title="Add to Cart Error", message="<b>bad</b>"))
        assert "&lt;b&gt;bad&lt;/b&gt;" in text
        assert "<pre>" not in text

    def test_report_with_payload(self):
        report = ErrorReport(
            title="Add to Cart Error",
            message="Sorry, I couldn't add that item to your cart.",
            raw_details={"success": False, "error": "Product not found"},
        )
        text = format_error_report(report)
        assert "<pre>" in text
        assert "Product not found" in text

    def test_long_details_truncated(self):
        text = format_details("x" * (MAX_DETAILS_LENGTH + 500))
        assert len(text) <= MAX_DETAILS_LENGTH + 4
        assert text.endswith("...")


class TestTelegramObserver:
    @pytest.mark.asyncio
    async def test_user_entries_not_echoed(self):
        message = make_message()
        await TelegramObserver(message).on_entry(ConversationEntry(Speaker.USER, "hello"))
        message.answer.assert_not_called()

    @pytest.mark.asyncio
    async def test_bot_entry_sent(self):
        message = make_message()
        await TelegramObserver(message).on_entry(ConversationEntry(Speaker.BOT, "Hi & welcome"))

        message.answer.assert_awaited_once()
        args, kwargs = message.answer.call_args
        assert args[0] == "Hi &amp; welcome"
        assert kwargs["reply_markup"] is None

    @pytest.mark.asyncio
    async def test_link_rendered_as_button(self):
        message = make_message()
        entry = ConversationEntry(Speaker.BOT, "Not added", link="https://www.motonet.fi/fi/ostoskori")

        await TelegramObserver(message).on_entry(entry)

        markup = message.answer.call_args.kwargs["reply_markup"]
        assert markup.inline_keyboard[0][0].url == "https://www.motonet.fi/fi/ostoskori"

    @pytest.mark.asyncio
    async def test_interim_shows_typing(self):
        message = make_message()
        await TelegramObserver(message).on_entry(ConversationEntry(Speaker.BOT, "Trying...", interim=True))
        message.bot.send_chat_action.assert_awaited_once_with(chat_id=100, action="typing")

    @pytest.mark.asyncio
    async def test_error_report_has_dismiss_button(self):
        message = make_message()
        await TelegramObserver(message).on_error_report(ErrorReport("Connection Error", "timed out"))

        markup = message.answer.call_args.kwargs["reply_markup"]
        assert markup.inline_keyboard[0][0].callback_data == "diag:dismiss"
        message.bot.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_report_copied_to_operator(self):
        message = make_message(chat_id=100)
        await TelegramObserver(message, operator_chat_id=555).on_error_report(
            ErrorReport("Connection Error", "timed out")
        )
        assert message.bot.send_message.call_args.args[0] == 555

    @pytest.mark.asyncio
    async def test_operator_chat_not_sent_twice(self):
        message = make_message(chat_id=555)
        await TelegramObserver(message, operator_chat_id=555).on_error_report(
            ErrorReport("Connection Error", "timed out")
        )
        message.bot.send_message.assert_not_called()
