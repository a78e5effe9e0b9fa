"""
Gateway types — domain-side order payload.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkoutflow._types import AddressId, ProductId
from checkoutflow.cart import Cart
from checkoutflow.config import ShippingMethod, PaymentMethod


@dataclass(frozen=True, slots=True)
class OrderLine:
    product_id: ProductId
    quantity: int
    variant_id: str | None = None


@dataclass(frozen=True, slots=True)
class OrderPayload:
    """Everything the order service needs to create one order."""

    lines: tuple[OrderLine, ...]
    address_id: AddressId
    shipping: ShippingMethod
    payment: PaymentMethod
    coupon_code: str | None = None
    notes: str = ""

    @classmethod
    def from_cart(
        cls,
        cart: Cart,
        address_id: AddressId,
        shipping: ShippingMethod,
        payment: PaymentMethod,
        coupon_code: str | None = None,
        notes: str = "",
    ) -> OrderPayload:
        lines = tuple(
            OrderLine(
                product_id=item.product_id,
                quantity=item.quantity,
                variant_id=item.variant.id if item.variant else None,
            )
            for item in cart.items
        )
        return cls(lines, address_id, shipping, payment, coupon_code or None, notes)


__all__ = ("OrderLine", "OrderPayload")
