"""
Checkout configuration — fixed, process-wide.

Shipping and payment methods are enumerated here, not fetched. Pricing
constants can be overridden per process through `CheckoutSettings`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

# ═══════════════════════════════════════════════════════════════════════════════
# Pricing Constants
# ═══════════════════════════════════════════════════════════════════════════════

FREE_SHIPPING_THRESHOLD = 300_000
TAX_RATE = Decimal("0.11")
CART_SHIPPING_RATE = 15_000  # flat estimate shown on the cart page

# ═══════════════════════════════════════════════════════════════════════════════
# Shipping Methods
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ShippingMethod:
    id: str
    name: str
    price: int
    estimated_days: str


SHIPPING_METHODS: tuple[ShippingMethod, ...] = (
    ShippingMethod("REGULAR", "Regular", 15_000, "3-5 days"),
    ShippingMethod("EXPRESS", "Express", 30_000, "1-2 days"),
    ShippingMethod("SAME_DAY", "Same Day", 50_000, "Today"),
)

DEFAULT_SHIPPING = SHIPPING_METHODS[0]


def shipping_method(method_id: str) -> ShippingMethod | None:
    return next((m for m in SHIPPING_METHODS if m.id == method_id), None)


# ═══════════════════════════════════════════════════════════════════════════════
# Payment Methods
# ═══════════════════════════════════════════════════════════════════════════════


class PaymentMethod(Enum):
    """
    Payment method choice. Selection only, no stored credentials.

    Value is the wire id sent as `paymentMethod`.
    """

    BANK_TRANSFER = "BANK_TRANSFER"
    GOPAY = "GOPAY"
    OVO = "OVO"
    DANA = "DANA"
    COD = "COD"

    @property
    def label(self) -> str:
        return _PAYMENT_INFO[self][0]

    @property
    def description(self) -> str:
        return _PAYMENT_INFO[self][1]


_PAYMENT_INFO: dict[PaymentMethod, tuple[str, str]] = {
    PaymentMethod.BANK_TRANSFER: ("Bank Transfer", "BCA, BNI, Mandiri, BRI"),
    PaymentMethod.GOPAY: ("GoPay", "Pay with the Gojek app"),
    PaymentMethod.OVO: ("OVO", "Pay with the OVO app"),
    PaymentMethod.DANA: ("DANA", "Pay with the DANA app"),
    PaymentMethod.COD: ("Cash on Delivery", "Pay when the package arrives"),
}

PAYMENT_METHODS: tuple[PaymentMethod, ...] = tuple(PaymentMethod)

DEFAULT_PAYMENT = PaymentMethod.BANK_TRANSFER

# ═══════════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CheckoutSettings:
    """
    Checkout settings.

    Immutable: each `with_*` returns a new instance.

    Example:
        settings = (
            CheckoutSettings()
            .with_api("https://shop.example.com/api")
            .with_timeout(seconds=5)
        )
    """

    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 10.0
    free_shipping_threshold: int = FREE_SHIPPING_THRESHOLD
    tax_rate: Decimal = TAX_RATE
    cart_shipping_rate: int = CART_SHIPPING_RATE
    shipping_methods: tuple[ShippingMethod, ...] = SHIPPING_METHODS

    @property
    def default_shipping(self) -> ShippingMethod:
        return self.shipping_methods[0]

    def with_api(self, base_url: str) -> CheckoutSettings:
        return replace(self, api_base_url=base_url.rstrip("/"))

    def with_timeout(self, *, seconds: float) -> CheckoutSettings:
        return replace(self, request_timeout=seconds)

    def with_free_shipping_threshold(self, amount: int) -> CheckoutSettings:
        return replace(self, free_shipping_threshold=amount)

    def with_tax_rate(self, rate: Decimal | str) -> CheckoutSettings:
        return replace(self, tax_rate=Decimal(rate))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> CheckoutSettings:
        """
        Read overrides from CHECKOUT_* variables.

        CHECKOUT_API_URL, CHECKOUT_TIMEOUT, CHECKOUT_FREE_SHIPPING_THRESHOLD,
        CHECKOUT_TAX_RATE, CHECKOUT_CART_SHIPPING_RATE. Missing ones keep the
        defaults.
        """
        env = os.environ if env is None else env
        settings = cls()
        if url := env.get("CHECKOUT_API_URL"):
            settings = settings.with_api(url)
        if timeout := env.get("CHECKOUT_TIMEOUT"):
            settings = settings.with_timeout(seconds=float(timeout))
        if threshold := env.get("CHECKOUT_FREE_SHIPPING_THRESHOLD"):
            settings = settings.with_free_shipping_threshold(int(threshold))
        if rate := env.get("CHECKOUT_TAX_RATE"):
            settings = settings.with_tax_rate(rate)
        if cart_rate := env.get("CHECKOUT_CART_SHIPPING_RATE"):
            settings = replace(settings, cart_shipping_rate=int(cart_rate))
        return settings


__all__ = (
    "FREE_SHIPPING_THRESHOLD",
    "TAX_RATE",
    "CART_SHIPPING_RATE",
    "ShippingMethod",
    "SHIPPING_METHODS",
    "DEFAULT_SHIPPING",
    "shipping_method",
    "PaymentMethod",
    "PAYMENT_METHODS",
    "DEFAULT_PAYMENT",
    "CheckoutSettings",
)
