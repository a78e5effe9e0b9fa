"""
Cart store — the single writer for a customer's cart.

Persistent storage is owned elsewhere; implement `CartStore` for it.
`MemoryCartStore` serves a single process and tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

from combinators import lift as L
from kungfu import Result, Ok, Error

from checkoutflow.cart._types import Cart
from checkoutflow.errors import CheckoutError, CheckoutErrors
from checkoutflow.log import get_logger

log = get_logger(__name__)


class CartStore(Protocol):
    """
    Cart storage protocol.

    Methods raise on storage failure; `mutate` and the order submitter lift
    them into Result.

    Example:
        class SessionCartStore:
            def __init__(self, session: HttpSession) -> None:
                self.session = session

            async def load(self) -> Cart:
                return decode_cart(await self.session.get("cart"))

            async def save(self, cart: Cart) -> None:
                await self.session.set("cart", encode_cart(cart))

            async def clear(self) -> None:
                await self.session.delete("cart")
    """

    async def load(self) -> Cart:
        """Current cart."""
        ...

    async def save(self, cart: Cart) -> None:
        """Replace the stored cart."""
        ...

    async def clear(self) -> None:
        """Remove every line."""
        ...


class MemoryCartStore:
    """In-memory cart store. Single process only."""

    def __init__(self, cart: Cart | None = None) -> None:
        self._cart = cart or Cart()
        self._lock = asyncio.Lock()

    @property
    def cart(self) -> Cart:
        return self._cart

    async def load(self) -> Cart:
        return self._cart

    async def save(self, cart: Cart) -> None:
        async with self._lock:
            self._cart = cart

    async def clear(self) -> None:
        async with self._lock:
            self._cart = Cart()


async def mutate(
    store: CartStore,
    op: Callable[[Cart], Result[Cart, CheckoutError]],
) -> Result[Cart, CheckoutError]:
    """Load, apply a pure cart operation, save on success."""
    match await L.catching_async(store.load, on_error=store_error):
        case Ok(current):
            pass
        case Error(e):
            return Error(e)

    match op(current):
        case Ok(updated):
            pass
        case Error(e):
            log.info("cart_change_refused", code=e.code)
            return Error(e)

    match await L.catching_async(lambda: store.save(updated), on_error=store_error):
        case Ok(_):
            log.debug("cart_saved", items=len(updated.items))
            return Ok(updated)
        case Error(e):
            return Error(e)


def store_error(exc: Exception) -> CheckoutError:
    log.warning("cart_store_failed", error=str(exc))
    return CheckoutErrors.cart_store(f"Could not update your cart: {exc}")


__all__ = ("CartStore", "MemoryCartStore", "mutate", "store_error")
