"""
Order submitter — single flight, cart detach + order creation as one unit.

Commit order:
    1. detach the cart from the store (snapshot kept, restored on rollback)
    2. POST /orders
If 1 fails nothing is sent; if 2 fails the cart is restored. A restore that
itself fails is reported as CART_STORE_ERROR carrying the order's message.
"""

from __future__ import annotations

from combinators import lift as L
from kungfu import Result, Ok, Error

from checkoutflow._types import AddressId, OrderId, Redirect
from checkoutflow.cart import Cart, CartStore, store_error
from checkoutflow.config import ShippingMethod, PaymentMethod
from checkoutflow.errors import CheckoutError, CheckoutErrors
from checkoutflow.gateway import OrderGateway, OrderPayload
from checkoutflow.log import get_logger
from checkoutflow.submit import _commit as C

log = get_logger(__name__)

SUCCESS_PATH = "/checkout-success"


def success_redirect(order_id: OrderId) -> Redirect:
    return Redirect(f"{SUCCESS_PATH}?orderId={order_id.value}")


class OrderSubmitter:
    """
    Places orders for one checkout session.

    At most one submission is in flight; a second call while one is pending
    is refused without a request.
    """

    def __init__(self, orders: OrderGateway, cart_store: CartStore) -> None:
        self._orders = orders
        self._cart_store = cart_store
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(
        self,
        cart: Cart,
        address_id: AddressId | None,
        shipping: ShippingMethod,
        payment: PaymentMethod,
        coupon_code: str | None = None,
        notes: str = "",
    ) -> Result[Redirect, CheckoutError]:
        if self._in_flight:
            return Error(CheckoutErrors.submission_in_flight())
        if address_id is None:
            return Error(CheckoutErrors.address_required())
        if cart.is_empty:
            return Error(CheckoutErrors.empty_cart())

        payload = OrderPayload.from_cart(
            cart, address_id, shipping, payment, coupon_code, notes.strip()
        )

        self._in_flight = True
        try:
            result = await C.run_chain(
                C.step(
                    L.catching_async(self._detach_cart, on_error=store_error),
                    compensate=self._restore_cart,
                ),
                lambda _snapshot: C.step(self._orders.create_order(payload)),
            )
        finally:
            self._in_flight = False

        match result:
            case Ok(committed):
                order_id = committed.value
                log.info("order_created", order_id=order_id.value, lines=len(payload.lines))
                return Ok(success_redirect(order_id))
            case Error(failure):
                log.warning(
                    "order_failed",
                    code=failure.error.code,
                    step=failure.step_failed,
                    rollback_complete=failure.rollback_complete,
                )
                if not failure.rollback_complete:
                    # Order not placed and the store still empty
                    return Error(CheckoutErrors.cart_not_restored(failure.error.message))
                return Error(failure.error)

    async def _detach_cart(self) -> Cart:
        snapshot = await self._cart_store.load()
        await self._cart_store.clear()
        return snapshot

    async def _restore_cart(self, snapshot: Cart) -> None:
        await self._cart_store.save(snapshot)
        log.info("cart_restored", items=len(snapshot.items))


__all__ = ("OrderSubmitter", "success_redirect", "SUCCESS_PATH")
