"""
Cart operations — pure functions, each returns a new Cart.

Quantity stays in [1, stock]: a change to 0 removes the line, a change above
stock is refused.
"""

from __future__ import annotations

from dataclasses import replace

from kungfu import Result, Ok, Error

from checkoutflow._types import ItemId
from checkoutflow.cart._types import Cart, LineItem
from checkoutflow.errors import CheckoutError, CheckoutErrors


def add_item(cart: Cart, item: LineItem) -> Result[Cart, CheckoutError]:
    """
    Add a line, merging with an existing line of the same identity.

    Merged quantity is capped at stock.
    """
    if item.quantity < 1:
        return Error(CheckoutErrors.invalid_quantity(item.quantity))
    if item.stock < 1:
        return Error(CheckoutErrors.out_of_stock(item.id.value, item.quantity, item.stock))

    existing = cart.find(item.id)
    if existing is None:
        added = replace(item, quantity=min(item.quantity, item.stock))
        return Ok(Cart((*cart.items, added)))

    merged = replace(existing, quantity=min(existing.quantity + item.quantity, existing.stock))
    return Ok(_replace_line(cart, merged))


def set_quantity(cart: Cart, item_id: ItemId, quantity: int) -> Result[Cart, CheckoutError]:
    existing = cart.find(item_id)
    if existing is None:
        return Error(CheckoutErrors.item_not_found(item_id.value))
    if quantity <= 0:
        return Ok(remove_item(cart, item_id))
    if quantity > existing.stock:
        return Error(CheckoutErrors.out_of_stock(item_id.value, quantity, existing.stock))
    return Ok(_replace_line(cart, replace(existing, quantity=quantity)))


def increment(cart: Cart, item_id: ItemId) -> Result[Cart, CheckoutError]:
    existing = cart.find(item_id)
    if existing is None:
        return Error(CheckoutErrors.item_not_found(item_id.value))
    if existing.at_stock_limit:
        return Error(
            CheckoutErrors.out_of_stock(item_id.value, existing.quantity + 1, existing.stock)
        )
    return set_quantity(cart, item_id, existing.quantity + 1)


def decrement(cart: Cart, item_id: ItemId) -> Result[Cart, CheckoutError]:
    existing = cart.find(item_id)
    if existing is None:
        return Error(CheckoutErrors.item_not_found(item_id.value))
    return set_quantity(cart, item_id, existing.quantity - 1)


def remove_item(cart: Cart, item_id: ItemId) -> Cart:
    return Cart(tuple(item for item in cart.items if item.id != item_id))


def clear(_cart: Cart) -> Cart:
    return Cart()


def _replace_line(cart: Cart, line: LineItem) -> Cart:
    return Cart(tuple(line if item.id == line.id else item for item in cart.items))


__all__ = (
    "add_item",
    "set_quantity",
    "increment",
    "decrement",
    "remove_item",
    "clear",
)
