"""
Price calculator — pure integer arithmetic.

    total = max(0, subtotal - discount + shipping + tax)
    tax   = round_half_up(subtotal * rate)   # on subtotal only
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from checkoutflow.cart import Cart
from checkoutflow.config import CheckoutSettings
from checkoutflow.coupon import CouponResult
from checkoutflow.pricing._types import ShippingPolicy, PriceBreakdown, CartSummary


def subtotal(cart: Cart) -> int:
    return sum(item.unit_price * item.quantity for item in cart.items)


def compute_tax(amount: int, rate: Decimal | str | float) -> int:
    """Tax rounded half-up to whole currency units."""
    exact = Decimal(amount) * _as_decimal(rate)
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def shipping_cost(
    amount: int,
    price: int,
    policy: ShippingPolicy,
    threshold: int,
) -> int:
    match policy:
        case ShippingPolicy.FREE_OVER_THRESHOLD:
            return 0 if amount >= threshold else price
        case ShippingPolicy.NOMINAL:
            return price


def free_shipping_remaining(amount: int, threshold: int) -> int:
    """How much more to spend for free shipping; 0 once reached."""
    return max(0, threshold - amount)


def compute(
    cart: Cart,
    discount: int,
    shipping_price: int,
    tax_rate: Decimal | str | float,
    policy: ShippingPolicy = ShippingPolicy.NOMINAL,
    threshold: int = 0,
) -> PriceBreakdown:
    """
    Full price breakdown for a cart.

    `discount` comes from a validated coupon (0 when none); it is clamped to
    [0, subtotal]. `threshold` only matters for FREE_OVER_THRESHOLD.
    """
    sub = subtotal(cart)
    applied = min(max(discount, 0), sub)
    shipping = shipping_cost(sub, shipping_price, policy, threshold)
    tax = compute_tax(sub, tax_rate)
    total = max(0, sub - applied + shipping + tax)
    return PriceBreakdown(
        subtotal=sub,
        discount=applied,
        shipping_cost=shipping,
        tax=tax,
        total=total,
    )


def cart_summary(
    cart: Cart,
    coupon: CouponResult | None,
    settings: CheckoutSettings,
) -> CartSummary:
    """Cart page totals: flat shipping waived over the threshold, no tax."""
    breakdown = compute(
        cart,
        discount=coupon.discount_amount if coupon else 0,
        shipping_price=settings.cart_shipping_rate,
        tax_rate=0,
        policy=ShippingPolicy.FREE_OVER_THRESHOLD,
        threshold=settings.free_shipping_threshold,
    )
    return CartSummary(
        breakdown=breakdown,
        free_shipping_remaining=free_shipping_remaining(
            breakdown.subtotal, settings.free_shipping_threshold
        ),
        coupon_code=coupon.code if coupon else None,
    )


def _as_decimal(rate: Decimal | str | float) -> Decimal:
    if isinstance(rate, Decimal):
        return rate
    # str() first so 0.11 stays 0.11 rather than its binary expansion
    return Decimal(str(rate))


__all__ = (
    "subtotal",
    "compute_tax",
    "shipping_cost",
    "free_shipping_remaining",
    "compute",
    "cart_summary",
)
