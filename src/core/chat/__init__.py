"""
Chat module: intent detection, transcript and per-user sessions.
"""

from src.core.chat.intent import Intent, IntentKind, classify
from src.core.chat.log import ConversationEntry, ConversationLog, Speaker
from src.core.chat.session import ChatSession, ErrorReport, SessionObserver, SessionStore

__all__ = [
    "Intent",
    "IntentKind",
    "classify",
    "ConversationEntry",
    "ConversationLog",
    "Speaker",
    "ChatSession",
    "ErrorReport",
    "SessionObserver",
    "SessionStore",
]
