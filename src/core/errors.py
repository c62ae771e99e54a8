"""
Error taxonomy for the chat core.

None of these is fatal to a session: each one ends in a bot message,
an error report, or both.
"""

from typing import Any, Optional


class CartBotError(Exception):
    """Base class for all chat core errors."""


class InputError(CartBotError):
    """User input rejected before classification."""


class EmptyUtteranceError(InputError):
    """Utterance is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Utterance is empty")


class OfflineError(CartBotError):
    """Cart action attempted while the shop proxy is unreachable."""

    def __init__(self, status_text: str = "") -> None:
        self.status_text = status_text
        super().__init__(f"Shop proxy is not connected ({status_text})" if status_text else "Shop proxy is not connected")


class TransportFailure(CartBotError):
    """Network failure or undecodable answer from the shop proxy."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ServerRejection(CartBotError):
    """Shop proxy was reachable but rejected the operation."""

    def __init__(self, message: str, payload: Optional[dict[str, Any]] = None) -> None:
        self.payload = payload or {}
        super().__init__(message)


class PlatformSwitchError(CartBotError):
    """Platform switch failed; the previous platform stays active."""
