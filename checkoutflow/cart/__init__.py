"""
Cart — line items, pure mutations, single-writer store.

    from checkoutflow import cart as K

    result = K.increment(cart, ItemId("tee-xl"))
    result = await K.mutate(store, lambda c: K.decrement(c, ItemId("tee-xl")))
"""

from checkoutflow.cart._types import Variant, LineItem, Cart
from checkoutflow.cart._ops import (
    add_item,
    set_quantity,
    increment,
    decrement,
    remove_item,
    clear,
)
from checkoutflow.cart._store import CartStore, MemoryCartStore, mutate, store_error

__all__ = (
    # Types
    "Variant",
    "LineItem",
    "Cart",
    # Operations
    "add_item",
    "set_quantity",
    "increment",
    "decrement",
    "remove_item",
    "clear",
    # Store
    "CartStore",
    "MemoryCartStore",
    "mutate",
    "store_error",
)
