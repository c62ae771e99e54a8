"""
Bot reply texts.
"""

from src.core.cart.models import RejectionReason

WELCOME = (
    "Hello! I'm your shopping assistant. I can help you add products to your cart. "
    "What would you like to shop for today?"
)

GREETING = "Hello! I'm your shopping assistant for {platform}. How can I help you today?"

HELP = (
    "I can help you add products to your cart. Try saying something like "
    "\"Add 2 winter tires to my cart\" or \"Add motor oil product id 59-5064\"."
)

THANKS = "You're welcome! Is there anything else you'd like to add to your cart?"

FAREWELL = "Thank you for shopping with us! Have a great day!"

UNRECOGNIZED = (
    "I'm designed to help you add products to your cart. Try asking me to add a specific "
    "product, like \"Add winter tires to my cart\" or \"Add 2 bottles of motor oil\"."
)

CART_CLEARED = "I've cleared your cart. What would you like to shop for?"

ITEM_REMOVED = "I've removed {product_name} from your cart."

OFFLINE = (
    "Sorry, I cannot process your request because I'm not connected to the server. "
    "Please check your connection and try again."
)

ATTEMPTING = "I'll try to add {quantity} {product_name} to your cart..."

ADDED = "Great! I've added {quantity} {product_name} to your cart."

ADD_FAILED = "Sorry, I couldn't add that item to your cart."

REJECTION_HINTS = {
    RejectionReason.AUTHENTICATION: " It seems there might be an authentication issue.",
    RejectionReason.NOT_FOUND: " The product might not exist or the ID might be incorrect.",
    RejectionReason.OTHER: "",
}

CONNECTION_ERROR = "Sorry, there was an error connecting to the server. Please try again later."

CART_PAGE_FALLBACK = (
    "The item was NOT added to your cart. You can open the {platform} cart page "
    "and add it there yourself."
)

PLATFORM_SWITCHED = "Switched to {platform} store. How can I help you shop today?"


def rejection_message(reason: RejectionReason) -> str:
    """User-facing explanation for a rejected add."""
    return ADD_FAILED + REJECTION_HINTS[reason]
