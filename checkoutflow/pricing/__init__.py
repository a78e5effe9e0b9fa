"""
Pricing — subtotal, discount, shipping, tax, total.

    from checkoutflow import pricing as P

    breakdown = P.compute(cart, discount=20_000, shipping_price=15_000, tax_rate="0.11")
    summary = P.cart_summary(cart, coupon, settings)
"""

from checkoutflow.pricing._types import ShippingPolicy, PriceBreakdown, CartSummary
from checkoutflow.pricing._calc import (
    subtotal,
    compute_tax,
    shipping_cost,
    free_shipping_remaining,
    compute,
    cart_summary,
)
from checkoutflow.pricing._format import format_idr

__all__ = (
    # Types
    "ShippingPolicy",
    "PriceBreakdown",
    "CartSummary",
    # Calculator
    "subtotal",
    "compute_tax",
    "shipping_cost",
    "free_shipping_remaining",
    "compute",
    "cart_summary",
    # Formatting
    "format_idr",
)
