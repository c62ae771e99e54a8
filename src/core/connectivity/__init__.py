"""
Shop proxy connectivity tracking.
"""

from src.core.connectivity.monitor import ConnectivityMonitor
from src.core.connectivity.state import ConnectionState, ConnectionStatus

__all__ = [
    "ConnectivityMonitor",
    "ConnectionState",
    "ConnectionStatus",
]
