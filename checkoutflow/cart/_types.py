"""
Cart types — line items and the cart value.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkoutflow._types import ItemId, ProductId


@dataclass(frozen=True, slots=True)
class Variant:
    """Selected product variant, e.g. Size: XL."""

    id: str
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One cart line.

    Invariant: 1 <= quantity <= stock, unit_price >= 0 (whole currency units).
    """

    id: ItemId
    product_id: ProductId
    name: str
    unit_price: int
    quantity: int
    stock: int
    variant: Variant | None = None
    image: str | None = None
    slug: str | None = None

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity

    @property
    def at_stock_limit(self) -> bool:
        return self.quantity >= self.stock


@dataclass(frozen=True, slots=True)
class Cart:
    """Ordered line items, unique by identity."""

    items: tuple[LineItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def find(self, item_id: ItemId) -> LineItem | None:
        return next((item for item in self.items if item.id == item_id), None)


__all__ = ("Variant", "LineItem", "Cart")
