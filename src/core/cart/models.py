"""
Cart models for the chat bot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True)
class CartLine:
    """Single product in the cart."""
    product_id: str
    product_name: str
    quantity: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class Cart:
    """
    Locally held view of the retailer cart.

    Lines keep first-add order and product ids are unique.
    Use the reconciler functions to derive a changed cart.
    """
    lines: tuple[CartLine, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_quantity(self) -> int:
        """Total number of units in the cart."""
        return sum(line.quantity for line in self.lines)

    def find(self, product_id: str) -> Optional[CartLine]:
        """Line for `product_id`, if present."""
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "lines": [line.to_dict() for line in self.lines],
            "total_quantity": self.total_quantity,
        }

    def format_summary(self) -> str:
        """Format cart lines as text summary."""
        if not self.lines:
            return "Your cart is empty"

        lines = []
        for i, line in enumerate(self.lines, 1):
            lines.append(f"{i}. {line.product_name} (ID: {line.product_id}) × {line.quantity}")
        return "\n".join(lines)


class RejectionReason(Enum):
    """Why the shop proxy rejected an add-to-cart."""
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not-found"
    OTHER = "other"


@dataclass(frozen=True)
class AddItemSuccess:
    """Proxy confirmed the add."""
    line: CartLine


@dataclass(frozen=True)
class AddItemRejected:
    """Proxy was reachable but refused the add."""
    reason: RejectionReason
    raw_message: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AddItemTransportError:
    """Proxy could not be reached or answered garbage."""
    raw_message: str


CartActionOutcome = Union[AddItemSuccess, AddItemRejected, AddItemTransportError]
