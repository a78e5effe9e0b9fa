"""
Checkout totals and the review page summary.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from checkoutflow.address import Address
from checkoutflow.cart import Cart
from checkoutflow.checkout._types import CheckoutState
from checkoutflow.config import CheckoutSettings
from checkoutflow.pricing import PriceBreakdown, ShippingPolicy, compute


def checkout_breakdown(
    cart: Cart,
    state: CheckoutState,
    settings: CheckoutSettings,
) -> PriceBreakdown:
    """Checkout totals: selected method's price always charged, tax added."""
    return compute(
        cart,
        discount=state.discount,
        shipping_price=state.draft.shipping.price,
        tax_rate=settings.tax_rate,
        policy=ShippingPolicy.NOMINAL,
    )


@dataclass(frozen=True, slots=True)
class ReviewLine:
    name: str
    variant: str | None  # "Size: XL"
    quantity: int
    line_total: int


@dataclass(frozen=True, slots=True)
class ReviewSummary:
    lines: tuple[ReviewLine, ...]
    address: Address | None
    shipping_name: str
    shipping_estimate: str
    payment_label: str
    notes: str
    coupon_code: str | None
    breakdown: PriceBreakdown


def review_summary(
    cart: Cart,
    state: CheckoutState,
    addresses: Iterable[Address],
    settings: CheckoutSettings,
) -> ReviewSummary:
    draft = state.draft
    return ReviewSummary(
        lines=tuple(
            ReviewLine(
                name=item.name,
                variant=f"{item.variant.name}: {item.variant.value}" if item.variant else None,
                quantity=item.quantity,
                line_total=item.line_total,
            )
            for item in cart.items
        ),
        address=next((a for a in addresses if a.id == state.address_id), None),
        shipping_name=draft.shipping.name,
        shipping_estimate=draft.shipping.estimated_days,
        payment_label=draft.payment.label,
        notes=draft.notes,
        coupon_code=state.coupon_code,
        breakdown=checkout_breakdown(cart, state, settings),
    )


__all__ = ("checkout_breakdown", "ReviewLine", "ReviewSummary", "review_summary")
