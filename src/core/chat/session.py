"""
Per-user chat session state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from src.core.cart.models import Cart
from src.core.chat.log import ConversationEntry, ConversationLog, Speaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorReport:
    """Diagnostic details kept out of the conversation."""
    title: str
    message: str
    raw_details: Optional[Any] = None


class SessionObserver:
    """
    Receives session output as it is produced.

    Entries are delivered right after they are appended, so a progress
    notice reaches the user before the request it announces completes.
    """

    async def on_entry(self, entry: ConversationEntry) -> None:
        pass

    async def on_error_report(self, report: ErrorReport) -> None:
        pass


NULL_OBSERVER = SessionObserver()


@dataclass
class ChatSession:
    """Cart and transcript of one user."""
    user_id: int
    cart: Cart = field(default_factory=Cart)
    log: ConversationLog = field(default_factory=ConversationLog)

    async def post(
        self,
        entry: ConversationEntry,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> ConversationEntry:
        """Append an entry and hand it to the observer."""
        self.log.append(entry)
        await observer.on_entry(entry)
        return entry

    async def user_says(
        self,
        text: str,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> ConversationEntry:
        return await self.post(ConversationEntry(Speaker.USER, text), observer)

    async def bot_says(
        self,
        text: str,
        observer: SessionObserver = NULL_OBSERVER,
        interim: bool = False,
        link: Optional[str] = None,
    ) -> ConversationEntry:
        return await self.post(
            ConversationEntry(Speaker.BOT, text, interim=interim, link=link),
            observer,
        )


class SessionStore:
    """In-memory sessions keyed by user id."""

    def __init__(self) -> None:
        self._sessions: dict[int, ChatSession] = {}

    def get(self, user_id: int) -> ChatSession:
        """Get or create the session of a user."""
        session = self._sessions.get(user_id)
        if session is None:
            session = ChatSession(user_id=user_id)
            self._sessions[user_id] = session
            logger.debug(f"New chat session for user {user_id}")
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._sessions
