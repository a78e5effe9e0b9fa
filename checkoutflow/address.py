"""
Addresses — supplied by the customer's address book.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from checkoutflow._types import AddressId


@dataclass(frozen=True, slots=True)
class Address:
    id: AddressId
    recipient_name: str
    phone: str
    street: str
    city: str
    state: str
    zip_code: str
    label: str = ""
    is_default: bool = False


def default_address(addresses: Iterable[Address]) -> Address | None:
    """The address flagged default, if any. At most one is expected."""
    return next((a for a in addresses if a.is_default), None)


def contains(addresses: Iterable[Address], address_id: AddressId) -> bool:
    return any(a.id == address_id for a in addresses)


__all__ = ("Address", "default_address", "contains")
