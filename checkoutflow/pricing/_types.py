"""
Pricing types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ShippingPolicy(Enum):
    """
    How the selected shipping price turns into a shipping cost.

    FREE_OVER_THRESHOLD: cart page, free once subtotal reaches the threshold.
    NOMINAL: checkout, always the selected method's price.
    """

    FREE_OVER_THRESHOLD = auto()
    NOMINAL = auto()


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """Derived totals. Recomputed on every call, never stored."""

    subtotal: int
    discount: int
    shipping_cost: int
    tax: int
    total: int


@dataclass(frozen=True, slots=True)
class CartSummary:
    """Cart page view: breakdown plus the free-shipping banner amount."""

    breakdown: PriceBreakdown
    free_shipping_remaining: int
    coupon_code: str | None

    @property
    def qualifies_for_free_shipping(self) -> bool:
        return self.free_shipping_remaining == 0


__all__ = ("ShippingPolicy", "PriceBreakdown", "CartSummary")
