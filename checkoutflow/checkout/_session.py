"""
Checkout session — one customer's checkout, from entry to order.

Owns the state and sequences the three network calls (address list, coupon
validation, order creation). Flags are set before each await so the same
session cannot re-enter a call. After `close()` late responses are dropped
without touching the state and reported as SESSION_CLOSED.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from combinators import lift as L
from kungfu import Result, Ok, Error

from checkoutflow._types import AddressId, Redirect
from checkoutflow.address import Address, default_address, contains
from checkoutflow.cart import Cart, CartStore, mutate, store_error
from checkoutflow.checkout import _machine as M
from checkoutflow.checkout._summary import checkout_breakdown, review_summary, ReviewSummary
from checkoutflow.checkout._types import Step, CheckoutState
from checkoutflow.config import CheckoutSettings, ShippingMethod, PaymentMethod
from checkoutflow.coupon import CouponResult, normalize_code
from checkoutflow.errors import CheckoutError, CheckoutErrors
from checkoutflow.gateway import CouponGateway, AddressBook, OrderGateway
from checkoutflow.log import get_logger
from checkoutflow.pricing import PriceBreakdown, CartSummary, cart_summary, subtotal
from checkoutflow.submit import OrderSubmitter

log = get_logger(__name__)

type Transition = Callable[[CheckoutState], Result[CheckoutState, CheckoutError]]


class CheckoutSession:
    """
    Example:
        session = CheckoutSession(store, coupons=api, addresses=api, orders=api)
        if (redirect := await session.open(authenticated=user is not None)):
            return redirect
        await session.load_addresses()
        session.advance()
        ...
        match await session.submit():
            case Ok(redirect):
                ...
    """

    def __init__(
        self,
        cart_store: CartStore,
        *,
        coupons: CouponGateway,
        addresses: AddressBook,
        orders: OrderGateway,
        settings: CheckoutSettings | None = None,
    ) -> None:
        self._settings = settings or CheckoutSettings()
        self._cart_store = cart_store
        self._coupons = coupons
        self._address_book = addresses
        self._submitter = OrderSubmitter(orders, cart_store)
        self._cart = Cart()
        self._addresses: tuple[Address, ...] | None = None
        self._state = M.initial_state(settings=self._settings)
        self._active = True
        self._cart_error: CheckoutError | None = None

    @property
    def state(self) -> CheckoutState:
        return self._state

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def addresses(self) -> tuple[Address, ...]:
        return self._addresses or ()

    @property
    def settings(self) -> CheckoutSettings:
        return self._settings

    @property
    def active(self) -> bool:
        return self._active

    @property
    def cart_error(self) -> CheckoutError | None:
        """Why the cart could not be loaded on `open`, if it could not."""
        return self._cart_error

    def close(self) -> None:
        self._active = False
        log.info("checkout_closed", step=self._state.step.label)

    # ─── Entry ────────────────────────────────────────────────────────────────

    async def open(self, *, authenticated: bool) -> Redirect | None:
        """Load the cart and run the entry guard. None means stay on checkout."""
        match await L.catching_async(self._cart_store.load, on_error=store_error):
            case Ok(cart):
                self._cart = cart
                self._cart_error = None
            case Error(e):
                # Shown on the cart page the customer is sent to
                self._cart = Cart()
                self._cart_error = e

        redirect = M.enter(authenticated=authenticated, cart=self._cart)
        if redirect is not None:
            log.info("checkout_redirected", target=redirect.target)
        return redirect

    async def load_addresses(self) -> Result[tuple[Address, ...], CheckoutError]:
        """
        Fetch the address book.

        Selects the default address unless one is already selected. An empty
        list is fine: the customer stays on the address step.
        """
        if not self._active:
            return Error(CheckoutErrors.session_closed())

        result = await self._address_book.list_addresses()
        if not self._active:
            log.info("response_discarded", call="list_addresses")
            return Error(CheckoutErrors.session_closed())

        match result:
            case Ok(addresses):
                self._addresses = addresses
                default = default_address(addresses)
                if self._state.address_id is None and default is not None:
                    self._state = M.select_address(self._state, default.id)
                log.info("addresses_loaded", count=len(addresses))
                return Ok(addresses)
            case Error(e):
                log.warning("addresses_failed", code=e.code)
                return Error(e)

    # ─── Navigation ───────────────────────────────────────────────────────────

    def advance(self) -> Result[CheckoutState, CheckoutError]:
        return self._apply(M.advance)

    def back(self) -> Result[CheckoutState, CheckoutError]:
        return self._apply(lambda s: Ok(M.back(s)))

    def jump(self, target: Step) -> Result[CheckoutState, CheckoutError]:
        return self._apply(lambda s: M.jump(s, target))

    def select_address(self, address_id: AddressId) -> Result[CheckoutState, CheckoutError]:
        if self._addresses is not None and not contains(self._addresses, address_id):
            return Error(CheckoutErrors.stale_address(address_id.value))
        return self._apply(lambda s: Ok(M.select_address(s, address_id)))

    def select_shipping(self, method: ShippingMethod) -> Result[CheckoutState, CheckoutError]:
        if method not in self._settings.shipping_methods:
            log.info("shipping_refused", method=method.id)
            return Error(CheckoutErrors.unknown_shipping(method.id))
        return self._apply(lambda s: Ok(M.select_shipping(s, method)))

    def select_payment(self, payment: PaymentMethod) -> Result[CheckoutState, CheckoutError]:
        return self._apply(lambda s: Ok(M.select_payment(s, payment)))

    def set_notes(self, notes: str) -> Result[CheckoutState, CheckoutError]:
        return self._apply(lambda s: Ok(M.set_notes(s, notes)))

    def _apply(self, transition: Transition) -> Result[CheckoutState, CheckoutError]:
        if not self._active:
            return Error(CheckoutErrors.session_closed())
        match transition(self._state):
            case Ok(state):
                if state.step != self._state.step:
                    log.debug("step_changed", step=state.step.label)
                self._state = state
                return Ok(state)
            case Error(e):
                log.info("step_refused", code=e.code, step=self._state.step.label)
                return Error(e)

    # ─── Cart ─────────────────────────────────────────────────────────────────

    async def update_cart(
        self,
        op: Callable[[Cart], Result[Cart, CheckoutError]],
    ) -> Result[Cart, CheckoutError]:
        """Apply a cart operation through the store; a stale coupon is dropped."""
        if not self._active:
            return Error(CheckoutErrors.session_closed())
        if self._state.submitting:
            # The store is detached until the order settles
            return Error(CheckoutErrors.submission_in_flight())

        result = await mutate(self._cart_store, op)
        if not self._active:
            log.info("response_discarded", call="update_cart")
            return Error(CheckoutErrors.session_closed())

        match result:
            case Ok(cart):
                self._cart = cart
                self._reconcile_coupon()
                return Ok(cart)
            case Error(e):
                return Error(e)

    def _reconcile_coupon(self) -> None:
        previous = self._state.coupon
        self._state = M.reconcile_coupon(self._state, subtotal(self._cart))
        if previous is not None and self._state.coupon is None:
            log.info("coupon_invalidated", code=previous.code, reason="subtotal_changed")

    # ─── Coupon ───────────────────────────────────────────────────────────────

    async def apply_coupon(self, raw_code: str) -> Result[CouponResult, CheckoutError]:
        """Validate a code against the current subtotal. Works at any step."""
        if not self._active:
            return Error(CheckoutErrors.session_closed())
        match normalize_code(raw_code):
            case Ok(code):
                pass
            case Error(e):
                return Error(e)
        if self._state.coupon_loading:
            return Error(CheckoutErrors.coupon_in_flight())

        self._state = replace(self._state, coupon_loading=True)
        try:
            result = await self._coupons.validate(code, subtotal(self._cart))
        finally:
            if self._active:
                self._state = replace(self._state, coupon_loading=False)

        if not self._active:
            log.info("response_discarded", call="validate_coupon")
            return Error(CheckoutErrors.session_closed())

        match result:
            case Ok(coupon) if coupon.is_stale(subtotal(self._cart)):
                # Cart changed while the request was out
                log.info("coupon_invalidated", code=coupon.code, reason="cart_changed")
                return Error(CheckoutErrors.stale_coupon(coupon.code))
            case Ok(coupon):
                self._state = M.apply_coupon(self._state, coupon)
                log.info("coupon_applied", code=coupon.code, discount=coupon.discount_amount)
                return Ok(coupon)
            case Error(e):
                log.info("coupon_rejected", code=code, reason=e.code)
                return Error(e)

    def remove_coupon(self) -> Result[CheckoutState, CheckoutError]:
        return self._apply(lambda s: Ok(M.remove_coupon(s)))

    # ─── Pricing ──────────────────────────────────────────────────────────────

    def cart_summary(self) -> CartSummary:
        return cart_summary(self._cart, self._state.coupon, self._settings)

    def breakdown(self) -> PriceBreakdown:
        return checkout_breakdown(self._cart, self._state, self._settings)

    def review(self) -> ReviewSummary:
        return review_summary(self._cart, self._state, self.addresses, self._settings)

    # ─── Submit ───────────────────────────────────────────────────────────────

    async def submit(self) -> Result[Redirect, CheckoutError]:
        """Place the order from the review step."""
        if not self._active:
            return Error(CheckoutErrors.session_closed())
        if self._state.submitting:
            return Error(CheckoutErrors.submission_in_flight())
        match M.ready_to_submit(self._state, self._addresses):
            case Ok(review):
                pass
            case Error(e):
                log.info("submit_refused", code=e.code)
                return Error(e)

        self._state = replace(self._state, submitting=True)
        try:
            result = await self._submitter.submit(
                self._cart,
                review.address_id,
                review.draft.shipping,
                review.draft.payment,
                coupon_code=self._state.coupon_code,
                notes=review.draft.notes,
            )
            if self._active and isinstance(result, Error):
                await self._resync_cart()
        finally:
            if self._active:
                self._state = replace(self._state, submitting=False)

        if not self._active:
            log.info("response_discarded", call="create_order")
            return Error(CheckoutErrors.session_closed())

        match result:
            case Ok(redirect):
                self._cart = Cart()
                return Ok(redirect)
            case Error(e):
                return Error(e)

    async def _resync_cart(self) -> None:
        """
        After a failed order the restored store is authoritative again.

        When the restore did not land the store is empty; the session's copy
        is written back so the customer keeps their cart.
        """
        match await L.catching_async(self._cart_store.load, on_error=store_error):
            case Ok(cart) if not cart.is_empty:
                self._cart = cart
                return
            case _:
                pass

        kept = self._cart
        match await L.catching_async(lambda: self._cart_store.save(kept), on_error=store_error):
            case Ok(_):
                log.info("cart_resaved", items=len(kept.items))
            case Error(e):
                log.error("cart_resave_failed", code=e.code, items=len(kept.items))


__all__ = ("CheckoutSession",)
