"""
Add-to-cart orchestration.

Drives one add-to-cart turn: offline gate, product id, progress notice,
proxy call, and then either a cart merge or an explanation plus error report.
The add itself is never retried.
"""

import logging
from typing import Optional

from src.core.cart import reconciler
from src.core.cart.models import (
    AddItemRejected,
    AddItemSuccess,
    AddItemTransportError,
    CartActionOutcome,
    CartLine,
    RejectionReason,
)
from src.core.cart.resolver import ProductReferenceResolver
from src.core.chat import replies
from src.core.chat.intent import Intent, IntentKind
from src.core.chat.log import ConversationEntry
from src.core.chat.session import ChatSession, ErrorReport, NULL_OBSERVER, SessionObserver
from src.core.connectivity.state import ConnectionState
from src.core.errors import OfflineError, ServerRejection, TransportFailure
from src.integrations.shop_proxy.base import BaseShopProxy

logger = logging.getLogger(__name__)

AUTHENTICATION_MARKERS = ("cookie", "authentication")
NOT_FOUND_MARKERS = ("not found", "invalid product")


def classify_rejection(error_text: Optional[str]) -> RejectionReason:
    """Map proxy error text to a rejection reason."""
    if not error_text:
        return RejectionReason.OTHER

    lower = error_text.lower()
    if any(marker in lower for marker in AUTHENTICATION_MARKERS):
        return RejectionReason.AUTHENTICATION
    if any(marker in lower for marker in NOT_FOUND_MARKERS):
        return RejectionReason.NOT_FOUND
    return RejectionReason.OTHER


class CartOrchestrator:
    """Runs add-to-cart requests against the shop proxy."""

    def __init__(
        self,
        proxy: BaseShopProxy,
        resolver: ProductReferenceResolver,
        cart_pages: Optional[dict[str, str]] = None,
        cart_page_fallback: bool = True,
    ):
        self.proxy = proxy
        self.resolver = resolver
        self.cart_pages = cart_pages or {}
        self.cart_page_fallback = cart_page_fallback

    async def submit_add_item(
        self,
        product_id: str,
        quantity: int,
        product_name: str,
        connection: ConnectionState,
    ) -> CartActionOutcome:
        """
        Ask the proxy to add a product.

        Raises:
            OfflineError: proxy is not connected; nothing was sent
        """
        if not connection.connected:
            raise OfflineError(connection.status_text)

        try:
            await self.proxy.add_to_cart(product_id, quantity)
        except ServerRejection as e:
            reason = classify_rejection(str(e))
            logger.warning(f"Add to cart rejected ({reason.value}): {product_id} × {quantity}: {e}")
            return AddItemRejected(reason=reason, raw_message=str(e), payload=e.payload)
        except TransportFailure as e:
            logger.warning(f"Add to cart transport error: {product_id} × {quantity}: {e}")
            return AddItemTransportError(raw_message=str(e))

        logger.info(f"Added to cart on {connection.active_platform}: {product_id} × {quantity}")
        return AddItemSuccess(
            line=CartLine(product_id=product_id, product_name=product_name, quantity=quantity)
        )

    async def handle_add_item_intent(
        self,
        intent: Intent,
        session: ChatSession,
        connection: ConnectionState,
        observer: SessionObserver = NULL_OBSERVER,
    ) -> list[ConversationEntry]:
        """
        Run an ADD_ITEM turn and return the bot entries it appended.
        """
        if intent.kind != IntentKind.ADD_ITEM:
            raise ValueError(f"Expected an add-item intent, got {intent.kind.value}")

        start = len(session.log)

        if not connection.connected:
            await session.bot_says(replies.OFFLINE, observer)
            return session.log.since(start)

        quantity = intent.quantity if intent.quantity is not None else 1
        product_name = intent.product_text or ""
        product_id = intent.explicit_product_id or self.resolver.resolve(
            product_name, connection.active_platform
        )

        await session.bot_says(
            replies.ATTEMPTING.format(quantity=quantity, product_name=product_name),
            observer,
            interim=True,
        )

        outcome = await self.submit_add_item(product_id, quantity, product_name, connection)

        if isinstance(outcome, AddItemSuccess):
            session.cart = reconciler.merge(
                session.cart,
                outcome.line.product_id,
                outcome.line.product_name,
                outcome.line.quantity,
            )
            await session.bot_says(
                replies.ADDED.format(quantity=quantity, product_name=product_name),
                observer,
            )
            return session.log.since(start)

        if isinstance(outcome, AddItemRejected):
            message = replies.rejection_message(outcome.reason)
            await session.bot_says(message, observer)
            await observer.on_error_report(
                ErrorReport(
                    title="Add to Cart Error",
                    message=message,
                    raw_details=outcome.payload or outcome.raw_message,
                )
            )
        else:
            await session.bot_says(replies.CONNECTION_ERROR, observer)
            await observer.on_error_report(
                ErrorReport(title="Connection Error", message=outcome.raw_message)
            )

        await self._offer_cart_page(session, connection.active_platform, observer)
        return session.log.since(start)

    async def _offer_cart_page(
        self,
        session: ChatSession,
        platform: str,
        observer: SessionObserver,
    ) -> None:
        """Point the user at the platform cart page after a failed add."""
        if not self.cart_page_fallback:
            return

        cart_page = self.cart_pages.get(platform)
        if not cart_page:
            return

        await session.bot_says(
            replies.CART_PAGE_FALLBACK.format(platform=platform),
            observer,
            link=cart_page,
        )
