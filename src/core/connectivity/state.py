"""
Shop proxy connection state.
"""

from dataclasses import dataclass
from enum import Enum


class ConnectionStatus(Enum):
    UNKNOWN = "unknown"            # no probe finished yet
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass
class ConnectionState:
    """Reachability of the shop proxy and its active platform."""
    active_platform: str
    status: ConnectionStatus = ConnectionStatus.UNKNOWN
    status_text: str = "Connecting..."
    retry_count: int = 0

    @property
    def connected(self) -> bool:
        return self.status == ConnectionStatus.CONNECTED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "connected": self.connected,
            "status": self.status.value,
            "active_platform": self.active_platform,
            "status_text": self.status_text,
            "retry_count": self.retry_count,
        }
