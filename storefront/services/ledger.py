"""
Cart ledger

Pure transitions over immutable Cart values. Every function returns a new
cart and leaves its argument untouched. Totals are always derived from the
current lines.
"""

import logging
from typing import Any, Sequence

from ..core.exceptions import InvalidQuantityError
from ..models.cart import Cart, CartLine
from ..models.product import Product

logger = logging.getLogger(__name__)


def can_add_to_cart(product: Product) -> bool:
    """Whether the add-to-cart action is enabled for a product"""
    return product.in_stock


def _line_for(product: Product, quantity: int) -> CartLine:
    return CartLine(
        product_id=product.id,
        name=product.name,
        price=product.price,
        original_price=product.original_price,
        image_url=product.image_url,
        category=product.category,
        quantity=quantity,
    )


def add_item(cart: Cart, product: Product) -> Cart:
    """
    Add one unit of a product.

    An existing line only has its quantity bumped; the fields captured on
    the first add are kept. Products without stock leave the cart unchanged.
    """
    if not can_add_to_cart(product):
        logger.debug(f"Product {product.id} is out of stock, not added")
        return cart

    if cart.get_line(product.id) is None:
        return Cart(lines=(*cart.lines, _line_for(product, 1)))

    return Cart(lines=tuple(
        line.model_copy(update={"quantity": line.quantity + 1})
        if line.product_id == product.id else line
        for line in cart.lines
    ))


def remove_item(cart: Cart, product_id: int) -> Cart:
    """Remove the line for a product, if present"""
    if cart.get_line(product_id) is None:
        return cart
    return Cart(lines=tuple(line for line in cart.lines if line.product_id != product_id))


def set_quantity(cart: Cart, product_id: int, quantity: Any) -> Cart:
    """
    Set the quantity of a line.

    Zero removes the line. Products not in the cart are ignored.

    Raises:
        InvalidQuantityError: If quantity is negative or not an integer
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise InvalidQuantityError(quantity)

    if quantity == 0:
        return remove_item(cart, product_id)

    if cart.get_line(product_id) is None:
        return cart

    return Cart(lines=tuple(
        line.model_copy(update={"quantity": quantity})
        if line.product_id == product_id else line
        for line in cart.lines
    ))


def clear(cart: Cart) -> Cart:
    return Cart()


def refresh_lines(cart: Cart, snapshot: Sequence[Product]) -> Cart:
    """
    Re-capture line fields from the current catalog.

    Quantities are kept. Lines whose product is no longer in the catalog
    are dropped.
    """
    products = {p.id: p for p in snapshot}
    return Cart(lines=tuple(
        _line_for(products[line.product_id], line.quantity)
        for line in cart.lines
        if line.product_id in products
    ))


def total_items(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)


def total_value(cart: Cart) -> float:
    return sum((line.price * line.quantity for line in cart.lines), 0.0)
