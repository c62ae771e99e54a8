"""
Conversation transcript.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class Speaker(Enum):
    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class ConversationEntry:
    """One message in the conversation."""
    speaker: Speaker
    text: str
    interim: bool = False       # progress notice shown while a request is in flight
    link: Optional[str] = None  # URL rendered next to the message

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "speaker": self.speaker.value,
            "text": self.text,
            "interim": self.interim,
            "link": self.link,
        }


class ConversationLog:
    """Append-only, ordered list of conversation entries."""

    def __init__(self) -> None:
        self._entries: list[ConversationEntry] = []

    def append(self, entry: ConversationEntry) -> ConversationEntry:
        self._entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConversationEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ConversationEntry:
        return self._entries[index]

    @property
    def entries(self) -> tuple[ConversationEntry, ...]:
        return tuple(self._entries)

    def transcript(self, include_interim: bool = False) -> list[ConversationEntry]:
        """Entries without progress notices, unless asked for."""
        if include_interim:
            return list(self._entries)
        return [entry for entry in self._entries if not entry.interim]

    def since(self, index: int) -> list[ConversationEntry]:
        """Entries appended at or after position `index`."""
        return self._entries[index:]
