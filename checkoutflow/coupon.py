"""
Coupons — normalization and the applied-coupon value.

Coupon rules live on the server. The client only trims the code, asks the
gateway, and shows the returned discount.
"""

from __future__ import annotations

from dataclasses import dataclass

from kungfu import Result, Ok, Error

from checkoutflow.errors import CheckoutError, CheckoutErrors


@dataclass(frozen=True, slots=True)
class CouponResult:
    """
    A successfully validated coupon.

    validated_subtotal is the subtotal the gateway saw; a different cart
    subtotal makes the coupon stale.
    """

    code: str
    discount_amount: int
    validated_subtotal: int
    description: str | None = None

    def is_stale(self, subtotal: int) -> bool:
        return subtotal != self.validated_subtotal


def normalize_code(raw: str) -> Result[str, CheckoutError]:
    code = raw.strip()
    if not code:
        return Error(CheckoutErrors.empty_coupon())
    return Ok(code)


__all__ = ("CouponResult", "normalize_code")
