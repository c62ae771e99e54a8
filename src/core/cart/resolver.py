"""
Product reference resolution.

Turns a free-text product mention into a product id the shop proxy accepts.
There is no catalog lookup yet: the placeholder resolver only produces ids
in the shape each retailer uses, so the value itself is not a real product.
"""

import random
import re
from abc import ABC, abstractmethod
from typing import Callable, Optional


class ProductReferenceResolver(ABC):
    """Abstract base class for product id lookup."""

    @abstractmethod
    def resolve(self, product_text: str, platform: str) -> str:
        """
        Derive a product id for a product mention.

        Args:
            product_text: Product phrase from the user message
            platform: Active retail platform

        Returns:
            Product id in the platform's format
        """
        pass


# platform -> (generator, validation pattern)
IdFormat = tuple[Callable[[random.Random], str], re.Pattern]

PLATFORM_ID_FORMATS: dict[str, IdFormat] = {
    # Motonet: 59-5064
    "motonet": (
        lambda rng: f"{rng.randint(10, 99)}-{rng.randint(1000, 9999)}",
        re.compile(r"^\d{2}-\d{4}$"),
    ),
    # Rusta: P482913
    "rusta": (
        lambda rng: f"P{rng.randint(100000, 999999)}",
        re.compile(r"^P\d{6}$"),
    ),
}

DEFAULT_ID_FORMAT: IdFormat = (
    lambda rng: f"PROD-{rng.randint(10000, 99999)}",
    re.compile(r"^PROD-\d{5}$"),
)


def _id_format(platform: str) -> IdFormat:
    return PLATFORM_ID_FORMATS.get(platform, DEFAULT_ID_FORMAT)


def matches_platform_format(product_id: str, platform: str) -> bool:
    """Check that `product_id` has the shape used on `platform`."""
    return bool(_id_format(platform)[1].match(product_id))


class PlaceholderProductResolver(ProductReferenceResolver):
    """Generates random ids in the platform's format."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def resolve(self, product_text: str, platform: str) -> str:
        generate, _ = _id_format(platform)
        return generate(self.rng)
