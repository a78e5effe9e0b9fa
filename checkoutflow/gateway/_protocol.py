"""
Collaborator protocols.

Each call is one network round-trip returned as a lazy Result; nothing is sent
until it is awaited. Implementations never raise: failures come back as
`Error(CheckoutError)` with kind REMOTE_REJECTION or NETWORK_FAILURE.
"""

from __future__ import annotations

from typing import Protocol

from checkoutflow._types import Lazy, OrderId
from checkoutflow.address import Address
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import CheckoutError
from checkoutflow.gateway._types import OrderPayload


class CouponGateway(Protocol):
    def validate(self, code: str, subtotal: int) -> Lazy[CouponResult, CheckoutError]:
        """Validate an already-trimmed code against the current subtotal."""
        ...


class AddressBook(Protocol):
    def list_addresses(self) -> Lazy[tuple[Address, ...], CheckoutError]:
        """All addresses of the signed-in customer."""
        ...


class OrderGateway(Protocol):
    def create_order(self, payload: OrderPayload) -> Lazy[OrderId, CheckoutError]:
        """Create one order. No deduplication on this side."""
        ...


__all__ = ("CouponGateway", "AddressBook", "OrderGateway")
