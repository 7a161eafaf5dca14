"""
In-memory shopping cart.

The module-level functions are the transition rules: each takes the current
cart (a tuple of line items, in insertion order) and returns the next one.
CartStore holds the current cart for the running app and applies them.
The cart is never persisted; a fresh app starts with an empty cart.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple

from db.models import CartLineItem, Product
from utils.logger import get_logger

_logger = get_logger(__name__)

Cart = Tuple[CartLineItem, ...]


def add_product(cart: Cart, product: Product) -> Cart:
    """Increment the line for product.id, or append a new line with quantity 1.

    title/price/image are copied from the product only when the line is created.
    """
    if any(item.id == product.id for item in cart):
        return increment(cart, product.id)
    return cart + (
        CartLineItem(
            id=product.id,
            title=product.title,
            price=product.price,
            image=product.image,
            quantity=1,
        ),
    )


def remove(cart: Cart, item_id: int) -> Cart:
    return tuple(item for item in cart if item.id != item_id)


def increment(cart: Cart, item_id: int) -> Cart:
    return tuple(
        replace(item, quantity=item.quantity + 1) if item.id == item_id else item
        for item in cart
    )


def decrement(cart: Cart, item_id: int) -> Cart:
    """Decrement the quantity; a line that drops to zero is removed."""
    next_cart = []
    for item in cart:
        if item.id == item_id:
            item = replace(item, quantity=item.quantity - 1)
        if item.quantity > 0:
            next_cart.append(item)
    return tuple(next_cart)


def item_count(cart: Cart) -> int:
    return sum(item.quantity for item in cart)


def total(cart: Cart) -> float:
    # no rounding here, formatting is the view's job
    return sum((item.price * item.quantity for item in cart), 0)


class CartStore:
    def __init__(self) -> None:
        self._cart: Cart = ()

    @property
    def items(self) -> Cart:
        return self._cart

    def get_item(self, item_id: int) -> Optional[CartLineItem]:
        for item in self._cart:
            if item.id == item_id:
                return item
        return None

    def add_to_cart(self, product: Product) -> None:
        self._cart = add_product(self._cart, product)
        _logger.debug(f"Added product {product.id} to cart.")

    def remove_from_cart(self, item_id: int) -> None:
        self._cart = remove(self._cart, item_id)
        _logger.debug(f"Removed product {item_id} from cart.")

    def increase_quantity(self, item_id: int) -> None:
        self._cart = increment(self._cart, item_id)

    def decrease_quantity(self, item_id: int) -> None:
        self._cart = decrement(self._cart, item_id)

    def get_cart_item_count(self) -> int:
        return item_count(self._cart)

    def get_cart_total(self) -> float:
        return total(self._cart)
