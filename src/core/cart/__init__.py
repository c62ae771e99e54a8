"""
Cart module for the chat bot.
Holds the local cart view and product id resolution.
The add-to-cart flow lives in src.core.cart.orchestrator.
"""

from src.core.cart.models import (
    AddItemRejected,
    AddItemSuccess,
    AddItemTransportError,
    Cart,
    CartActionOutcome,
    CartLine,
    RejectionReason,
)
from src.core.cart.reconciler import clear, merge, remove
from src.core.cart.resolver import (
    PlaceholderProductResolver,
    ProductReferenceResolver,
    matches_platform_format,
)

__all__ = [
    # Models
    "Cart",
    "CartLine",
    "CartActionOutcome",
    "AddItemSuccess",
    "AddItemRejected",
    "AddItemTransportError",
    "RejectionReason",
    # Reconciler
    "merge",
    "remove",
    "clear",
    # Resolver
    "ProductReferenceResolver",
    "PlaceholderProductResolver",
    "matches_platform_format",
]
