"""
Builders and in-memory fakes for the gateway protocols and cart store.
"""

from __future__ import annotations

import asyncio
from typing import Any

from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutflow import AddressId, ItemId, OrderId, ProductId
from checkoutflow.address import Address
from checkoutflow.cart import Cart, LineItem, MemoryCartStore, Variant
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import CheckoutError, CheckoutErrors
from checkoutflow.gateway import OrderPayload

# ═══════════════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════════════


def line(
    key: str,
    unit_price: int,
    quantity: int = 1,
    stock: int = 10,
    variant: Variant | None = None,
) -> LineItem:
    return LineItem(
        id=ItemId(key),
        product_id=ProductId(f"prod-{key}"),
        name=key.title(),
        unit_price=unit_price,
        quantity=quantity,
        stock=stock,
        variant=variant,
    )


def cart_of(*items: LineItem) -> Cart:
    return Cart(items)


def address(key: str, *, is_default: bool = False) -> Address:
    return Address(
        id=AddressId(key),
        recipient_name="Budi Santoso",
        phone="081234567890",
        street="Jl. Merdeka 17",
        city="Bandung",
        state="Jawa Barat",
        zip_code="40111",
        label=key.title(),
        is_default=is_default,
    )


def address_json(key: str, *, is_default: bool = False) -> dict[str, Any]:
    return {
        "id": key,
        "recipientName": "Budi Santoso",
        "phone": "081234567890",
        "street": "Jl. Merdeka 17",
        "city": "Bandung",
        "state": "Jawa Barat",
        "zipCode": "40111",
        "label": key.title(),
        "isDefault": is_default,
    }


# ═══════════════════════════════════════════════════════════════════════════════
# In-memory fakes
# ═══════════════════════════════════════════════════════════════════════════════


def lazy[T](
    result: Result[T, CheckoutError],
    gate: asyncio.Event | None = None,
) -> LazyCoroResult[T, CheckoutError]:
    async def impl() -> Result[T, CheckoutError]:
        if gate is not None:
            await gate.wait()
        return result

    return LazyCoroResult(impl)


class FakeCoupons:
    def __init__(self, percent: dict[str, int] | None = None) -> None:
        self.percent = percent if percent is not None else {"DISKON10": 10}
        self.calls: list[tuple[str, int]] = []
        self.gate: asyncio.Event | None = None

    def validate(self, code: str, subtotal: int) -> LazyCoroResult[CouponResult, CheckoutError]:
        self.calls.append((code, subtotal))
        pct = self.percent.get(code)
        if pct is None:
            rejected = CheckoutErrors.rejected("COUPON_REJECTED", None, "Invalid coupon")
            return lazy(Error(rejected), self.gate)
        return lazy(Ok(CouponResult(code, subtotal * pct // 100, subtotal)), self.gate)


class FakeAddresses:
    def __init__(self, addresses: tuple[Address, ...] = ()) -> None:
        self.addresses = addresses
        self.gate: asyncio.Event | None = None

    def list_addresses(self) -> LazyCoroResult[tuple[Address, ...], CheckoutError]:
        return lazy(Ok(self.addresses), self.gate)


class FakeOrders:
    def __init__(self) -> None:
        self.payloads: list[OrderPayload] = []
        self.error: CheckoutError | None = None
        self.gate: asyncio.Event | None = None

    def create_order(self, payload: OrderPayload) -> LazyCoroResult[OrderId, CheckoutError]:
        async def impl() -> Result[OrderId, CheckoutError]:
            self.payloads.append(payload)
            if self.gate is not None:
                await self.gate.wait()
            if self.error is not None:
                return Error(self.error)
            return Ok(OrderId(f"ord-{len(self.payloads)}"))

        return LazyCoroResult(impl)


class BrokenCartStore(MemoryCartStore):
    """Fails on the chosen operation: "load", "save" or "clear"."""

    def __init__(self, cart: Cart, *, fail_on: str) -> None:
        super().__init__(cart)
        self.fail_on = fail_on

    async def load(self) -> Cart:
        if self.fail_on == "load":
            raise OSError("cart storage unavailable")
        return await super().load()

    async def save(self, cart: Cart) -> None:
        if self.fail_on == "save":
            raise OSError("cart storage unavailable")
        await super().save(cart)

    async def clear(self) -> None:
        if self.fail_on == "clear":
            raise OSError("cart storage unavailable")
        await super().clear()
