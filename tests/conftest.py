"""Pytest configuration for the cart bot tests."""

import os

# Settings require a token at import time
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST")

import random
from typing import Optional

import pytest

from src.core.assistant import ShoppingAssistant
from src.core.cart.orchestrator import CartOrchestrator
from src.core.cart.resolver import PlaceholderProductResolver
from src.core.chat.log import ConversationEntry
from src.core.chat.session import ChatSession, ErrorReport, SessionObserver
from src.core.connectivity.monitor import ConnectivityMonitor
from src.core.connectivity.state import ConnectionState, ConnectionStatus
from src.integrations.shop_proxy.base import BaseShopProxy
from src.integrations.shop_proxy.schemas import HealthResponse


CART_PAGES = {
    "motonet": "https://www.motonet.fi/fi/ostoskori",
    "rusta": "https://www.rusta.com/fi/cart",
}


class FakeShopProxy(BaseShopProxy):
    """In-memory shop proxy that records every call."""

    def __init__(self, platform: str = "motonet", cookies: Optional[dict[str, bool]] = None):
        self.platform = platform
        self.cookies = cookies if cookies is not None else {"motonet": True, "rusta": True}
        self.calls: list[tuple] = []

        # Failure switches
        self.health_error: Optional[Exception] = None
        self.add_error: Optional[Exception] = None
        self.switch_error: Optional[Exception] = None
        self.cart_url_error: Optional[Exception] = None
        self.closed = False

    async def health(self) -> HealthResponse:
        self.calls.append(("health",))
        if self.health_error:
            raise self.health_error
        return HealthResponse(current_platform=self.platform, cookie_status=dict(self.cookies))

    async def switch_platform(self, platform: str) -> str:
        self.calls.append(("switch_platform", platform))
        if self.switch_error:
            raise self.switch_error
        self.platform = platform
        return platform

    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        self.calls.append(("add_to_cart", product_id, quantity))
        if self.add_error:
            raise self.add_error

    async def cart_url(self, platform: str) -> str:
        self.calls.append(("cart_url", platform))
        if self.cart_url_error:
            raise self.cart_url_error
        return f"https://proxy.test/cart/{platform}"

    async def close(self) -> None:
        self.closed = True

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


class RecordingObserver(SessionObserver):
    """Collects entries and error reports in delivery order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    async def on_entry(self, entry: ConversationEntry) -> None:
        self.events.append(("entry", entry))

    async def on_error_report(self, report: ErrorReport) -> None:
        self.events.append(("report", report))

    @property
    def entries(self) -> list[ConversationEntry]:
        return [item for kind, item in self.events if kind == "entry"]

    @property
    def reports(self) -> list[ErrorReport]:
        return [item for kind, item in self.events if kind == "report"]


@pytest.fixture
def proxy() -> FakeShopProxy:
    return FakeShopProxy()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def session() -> ChatSession:
    return ChatSession(user_id=42)


@pytest.fixture
def connected() -> ConnectionState:
    return ConnectionState(
        active_platform="motonet",
        status=ConnectionStatus.CONNECTED,
        status_text="Connected to motonet API",
    )


@pytest.fixture
def disconnected() -> ConnectionState:
    return ConnectionState(
        active_platform="motonet",
        status=ConnectionStatus.DISCONNECTED,
        status_text="API server not responding",
    )


@pytest.fixture
def resolver() -> PlaceholderProductResolver:
    return PlaceholderProductResolver(rng=random.Random(7))


@pytest.fixture
def orchestrator(proxy, resolver) -> CartOrchestrator:
    return CartOrchestrator(proxy, resolver, cart_pages=CART_PAGES)


@pytest.fixture
def assistant(proxy, resolver) -> ShoppingAssistant:
    monitor = ConnectivityMonitor(
        proxy, default_platform="motonet", interval=60, retry_delay=0, max_retries=0
    )
    orchestrator = CartOrchestrator(proxy, resolver, cart_pages=CART_PAGES)
    return ShoppingAssistant(proxy, monitor, orchestrator, cart_pages=CART_PAGES)
