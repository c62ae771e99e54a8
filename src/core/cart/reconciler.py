"""
Cart reconciliation.
Every function returns a new Cart, so a cart with duplicate ids is never visible.
"""

from dataclasses import replace

from src.core.cart.models import Cart, CartLine


def merge(cart: Cart, product_id: str, product_name: str, quantity: int) -> Cart:
    """
    Merge an accepted add into the cart.

    An existing line for `product_id` gets the quantity added and keeps
    its first-seen name; otherwise a new line goes to the end.
    """
    lines = list(cart.lines)

    for i, line in enumerate(lines):
        if line.product_id == product_id:
            lines[i] = replace(line, quantity=line.quantity + quantity)
            return Cart(lines=tuple(lines))

    # Zero-quantity adds never create a line
    if quantity <= 0:
        return cart

    lines.append(CartLine(product_id=product_id, product_name=product_name, quantity=quantity))
    return Cart(lines=tuple(lines))


def remove(cart: Cart, product_id: str) -> Cart:
    """Drop the line for `product_id`; no-op when absent."""
    if cart.find(product_id) is None:
        return cart
    return Cart(lines=tuple(line for line in cart.lines if line.product_id != product_id))


def clear(cart: Cart) -> Cart:
    """Empty cart."""
    return Cart()
