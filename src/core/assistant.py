"""
Shopping assistant: one chat turn from user text to bot replies.
"""

import logging
from functools import lru_cache
from typing import Optional

from src.config import settings
from src.core.cart import reconciler
from src.core.cart.orchestrator import CartOrchestrator
from src.core.cart.resolver import PlaceholderProductResolver
from src.core.chat import replies
from src.core.chat.intent import Intent, IntentKind, classify
from src.core.chat.log import ConversationEntry
from src.core.chat.session import (
    NULL_OBSERVER,
    ChatSession,
    ErrorReport,
    SessionObserver,
    SessionStore,
)
from src.core.connectivity.monitor import ConnectivityMonitor
from src.core.connectivity.state import ConnectionState
from src.core.errors import EmptyUtteranceError, PlatformSwitchError, TransportFailure
from src.integrations.shop_proxy import BaseShopProxy, get_default_shop_proxy

logger = logging.getLogger(__name__)


class ShoppingAssistant:
    """Routes chat messages to the cart flow or to a fixed reply."""

    def __init__(
        self,
        proxy: BaseShopProxy,
        monitor: ConnectivityMonitor,
        orchestrator: CartOrchestrator,
        cart_pages: Optional[dict[str, str]] = None,
    ):
        self.proxy = proxy
        self.monitor = monitor
        self.orchestrator = orchestrator
        self.cart_pages = cart_pages or {}
        self.sessions = SessionStore()

    @property
    def connection(self) -> ConnectionState:
        return self.monitor.state

    async def start(self) -> None:
        """Start periodic checks; the first one runs right away."""
        self.monitor.start()

    async def close(self) -> None:
        await self.monitor.stop()
        await self.proxy.close()

    # =========================================================================
    # MESSAGES
    # =========================================================================

    async def handle_message(
        self,
        session: ChatSession,
        text: str,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> list[ConversationEntry]:
        """
        Handle one user message.

        Returns:
            Entries appended during the turn, user entry first

        Raises:
            EmptyUtteranceError: text is blank; nothing is logged
        """
        text = text.strip()
        if not text:
            raise EmptyUtteranceError()

        start = len(session.log)
        await session.user_says(text, observer)

        intent = classify(text, self.connection.active_platform)
        logger.info(f"User {session.user_id} [{intent.kind.value}]: {text[:50]}")

        if intent.kind == IntentKind.ADD_ITEM:
            await self.orchestrator.handle_add_item_intent(
                intent, session, self.connection, observer
            )
        elif intent.kind == IntentKind.CLEAR_CART:
            await self.clear_cart(session, observer)
        else:
            await session.bot_says(self._fixed_reply(intent), observer)

        return session.log.since(start)

    def _fixed_reply(self, intent: Intent) -> str:
        if intent.kind == IntentKind.GREETING:
            return replies.GREETING.format(platform=self.connection.active_platform)
        if intent.kind == IntentKind.HELP:
            return replies.HELP
        if intent.kind == IntentKind.THANKS:
            return replies.THANKS
        if intent.kind == IntentKind.FAREWELL:
            return replies.FAREWELL
        return replies.UNRECOGNIZED

    # =========================================================================
    # CART
    # =========================================================================

    async def clear_cart(
        self,
        session: ChatSession,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> None:
        session.cart = reconciler.clear(session.cart)
        await session.bot_says(replies.CART_CLEARED, observer)

    async def remove_item(
        self,
        session: ChatSession,
        product_id: str,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> bool:
        """
        Drop a line from the local cart view.
        The retailer cart is not touched; the proxy has no remove endpoint.
        """
        line = session.cart.find(product_id)
        if line is None:
            return False

        session.cart = reconciler.remove(session.cart, product_id)
        await session.bot_says(
            replies.ITEM_REMOVED.format(product_name=line.product_name), observer
        )
        return True

    async def cart_page_url(self, platform: Optional[str] = None) -> Optional[str]:
        """Retailer cart page, asked from the proxy first."""
        platform = platform or self.connection.active_platform
        try:
            return await self.proxy.cart_url(platform)
        except TransportFailure as e:
            logger.warning(f"Cart URL lookup failed for {platform}: {e}")
            return self.cart_pages.get(platform)

    # =========================================================================
    # PLATFORM
    # =========================================================================

    async def switch_platform(
        self,
        session: ChatSession,
        platform: str,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> bool:
        """
        Switch the active platform.

        Returns:
            True if the platform changed
        """
        if platform == self.connection.active_platform:
            return False

        try:
            state = await self.monitor.request_platform_switch(platform)
        except PlatformSwitchError as e:
            logger.warning(f"Platform switch to {platform} failed: {e}")
            await observer.on_error_report(
                ErrorReport(title="Platform Switch Error", message=str(e))
            )
            return False

        await session.bot_says(
            replies.PLATFORM_SWITCHED.format(platform=state.active_platform), observer
        )
        return True


@lru_cache(maxsize=1)
def get_assistant() -> ShoppingAssistant:
    """Get cached assistant wired from settings."""
    proxy = get_default_shop_proxy()
    monitor = ConnectivityMonitor(proxy)
    orchestrator = CartOrchestrator(
        proxy,
        PlaceholderProductResolver(),
        cart_pages=settings.platform_cart_pages,
        cart_page_fallback=settings.cart_page_fallback,
    )
    return ShoppingAssistant(proxy, monitor, orchestrator, cart_pages=settings.platform_cart_pages)
