"""
Intent detection for chat messages.

Rules are tried top-down and the first match wins. Several texts match more
than one rule ("add a hello kitty sticker"), so the order is part of the
contract: add-to-cart, clear cart, greeting, help, thanks, farewell.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from src.core.errors import EmptyUtteranceError

logger = logging.getLogger(__name__)


class IntentKind(Enum):
    ADD_ITEM = "add_item"
    CLEAR_CART = "clear_cart"
    GREETING = "greeting"
    HELP = "help"
    THANKS = "thanks"
    FAREWELL = "farewell"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Intent:
    """Detected intent. Slots are only set for ADD_ITEM."""
    kind: IntentKind
    quantity: Optional[int] = None
    product_text: Optional[str] = None
    explicit_product_id: Optional[str] = None

    @classmethod
    def add_item(
        cls,
        quantity: int,
        product_text: str,
        explicit_product_id: Optional[str] = None,
    ) -> "Intent":
        return cls(
            kind=IntentKind.ADD_ITEM,
            quantity=quantity,
            product_text=product_text,
            explicit_product_id=explicit_product_id,
        )


# add [<quantity>] [of] [the] <product> [to [my] cart]
ADD_TO_CART_PATTERN = re.compile(
    r"add\s+(?:(\d+)\s+)?(?:of\s+)?(?:the\s+)?(.+?)(?:\s+to\s+(?:my\s+)?cart)?$",
    re.IGNORECASE,
)

# product [id] [is] <id>; retailer ids always contain a digit
PRODUCT_ID_PATTERN = re.compile(
    r"product\s+(?:id\s+)?(?:is\s+)?((?=[a-zA-Z\-]*\d)[a-zA-Z0-9\-]+)",
    re.IGNORECASE,
)

CART_SUFFIX_PATTERN = re.compile(r"\s+to\s+(?:my\s+)?cart$", re.IGNORECASE)


def _strip_product_id_clause(phrase: str) -> str:
    """Cut the 'product id ...' clause out of a product phrase."""
    match = PRODUCT_ID_PATTERN.search(phrase)
    if not match:
        return phrase

    stripped = f"{phrase[:match.start()]} {phrase[match.end():]}"
    stripped = " ".join(stripped.split())
    stripped = CART_SUFFIX_PATTERN.sub("", stripped).strip()

    # Keep the raw phrase rather than return an empty product name
    return stripped or phrase


def _match_add_item(text: str) -> Optional[Intent]:
    match = ADD_TO_CART_PATTERN.search(text)
    if not match:
        return None

    quantity = int(match.group(1), 10) if match.group(1) else 1
    product_text = match.group(2).strip()

    product_id_match = PRODUCT_ID_PATTERN.search(text)
    explicit_product_id = product_id_match.group(1) if product_id_match else None
    if explicit_product_id:
        product_text = _strip_product_id_clause(product_text)

    return Intent.add_item(quantity, product_text, explicit_product_id)


def _keyword_rule(kind: IntentKind, *keywords: str) -> Callable[[str], Optional[Intent]]:
    """Rule matching when the lowercased text contains any keyword."""
    def match(text: str) -> Optional[Intent]:
        lower = text.lower()
        if any(keyword in lower for keyword in keywords):
            return Intent(kind=kind)
        return None
    return match


def _match_help(text: str) -> Optional[Intent]:
    lower = text.lower()
    if "help" in lower or ("how" in lower and "work" in lower):
        return Intent(kind=IntentKind.HELP)
    return None


@dataclass(frozen=True)
class IntentRule:
    """One classification rule: returns an Intent or None."""
    name: str
    match: Callable[[str], Optional[Intent]]


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule("add_item", _match_add_item),
    IntentRule("clear_cart", _keyword_rule(IntentKind.CLEAR_CART, "clear cart", "empty cart")),
    IntentRule("greeting", _keyword_rule(IntentKind.GREETING, "hello", "hi", "hey")),
    IntentRule("help", _match_help),
    IntentRule("thanks", _keyword_rule(IntentKind.THANKS, "thank")),
    IntentRule("farewell", _keyword_rule(IntentKind.FAREWELL, "bye", "goodbye")),
)


def classify(utterance: str, active_platform: str) -> Intent:
    """
    Classify a user message.

    Args:
        utterance: Raw user text
        active_platform: Platform the shop proxy is using; the built-in
            rules read the same on every platform

    Returns:
        Exactly one Intent; UNRECOGNIZED when no rule matches

    Raises:
        EmptyUtteranceError: text is empty or whitespace only
    """
    text = utterance.strip()
    if not text:
        raise EmptyUtteranceError()

    for rule in INTENT_RULES:
        intent = rule.match(text)
        if intent is not None:
            logger.debug(f"Intent '{rule.name}' on {active_platform}: {text[:50]}")
            return intent

    return Intent(kind=IntentKind.UNRECOGNIZED)
