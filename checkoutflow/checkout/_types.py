"""
Checkout state — tagged steps.

Steps past ADDRESS carry a non-optional address id, so a position that needs
an address cannot exist without one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from checkoutflow._types import AddressId
from checkoutflow.config import ShippingMethod, PaymentMethod, DEFAULT_SHIPPING, DEFAULT_PAYMENT
from checkoutflow.coupon import CouponResult


class Step(IntEnum):
    ADDRESS = 1
    SHIPPING = 2
    PAYMENT = 3
    REVIEW = 4

    @property
    def label(self) -> str:
        return self.name.title()


@dataclass(frozen=True, slots=True)
class Draft:
    """Selections made so far. Kept across every navigation."""

    shipping: ShippingMethod = DEFAULT_SHIPPING
    payment: PaymentMethod = DEFAULT_PAYMENT
    notes: str = ""


# ═══════════════════════════════════════════════════════════════════════════════
# Positions
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class AddressStep:
    draft: Draft = field(default_factory=Draft)
    address_id: AddressId | None = None
    furthest: Step = Step.ADDRESS

    @property
    def step(self) -> Step:
        return Step.ADDRESS


@dataclass(frozen=True, slots=True)
class ShippingStep:
    draft: Draft
    address_id: AddressId
    furthest: Step = Step.SHIPPING

    @property
    def step(self) -> Step:
        return Step.SHIPPING


@dataclass(frozen=True, slots=True)
class PaymentStep:
    draft: Draft
    address_id: AddressId
    furthest: Step = Step.PAYMENT

    @property
    def step(self) -> Step:
        return Step.PAYMENT


@dataclass(frozen=True, slots=True)
class ReviewStep:
    draft: Draft
    address_id: AddressId
    furthest: Step = Step.REVIEW

    @property
    def step(self) -> Step:
        return Step.REVIEW


type Position = AddressStep | ShippingStep | PaymentStep | ReviewStep


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout State
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CheckoutState:
    """
    One customer's checkout.

    coupon_loading and submitting are set before the matching request goes
    out and cleared when it settles.
    """

    position: Position = field(default_factory=AddressStep)
    coupon: CouponResult | None = None
    coupon_loading: bool = False
    submitting: bool = False

    @property
    def step(self) -> Step:
        return self.position.step

    @property
    def draft(self) -> Draft:
        return self.position.draft

    @property
    def address_id(self) -> AddressId | None:
        return self.position.address_id

    @property
    def discount(self) -> int:
        return self.coupon.discount_amount if self.coupon else 0

    @property
    def coupon_code(self) -> str | None:
        return self.coupon.code if self.coupon else None


__all__ = (
    "Step",
    "Draft",
    "AddressStep",
    "ShippingStep",
    "PaymentStep",
    "ReviewStep",
    "Position",
    "CheckoutState",
)
