"""
checkoutflow — cart to order through a gated four-step checkout.

    from checkoutflow import cart as K       # Cart values and operations
    from checkoutflow import pricing as P    # Price breakdowns
    from checkoutflow import checkout as CO  # Step machine and session
    from checkoutflow import gateway as G    # Coupon, address, order endpoints
    from checkoutflow import submit as Sub   # Order submission
"""

from checkoutflow import cart
from checkoutflow import pricing
from checkoutflow import gateway
from checkoutflow import submit
from checkoutflow import checkout
from checkoutflow._types import (
    Lazy,
    ItemId,
    ProductId,
    AddressId,
    OrderId,
    Redirect,
)
from checkoutflow.address import Address
from checkoutflow.config import CheckoutSettings, PaymentMethod, ShippingMethod
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import ErrorKind, CheckoutError, CheckoutErrors
from checkoutflow.log import configure_logging

__version__ = "0.1.0"

__all__ = (
    "cart",
    "pricing",
    "gateway",
    "submit",
    "checkout",
    "Lazy",
    "ItemId",
    "ProductId",
    "AddressId",
    "OrderId",
    "Redirect",
    "Address",
    "CheckoutSettings",
    "PaymentMethod",
    "ShippingMethod",
    "CouponResult",
    "ErrorKind",
    "CheckoutError",
    "CheckoutErrors",
    "configure_logging",
)
