"""
Step machine — pure transitions over CheckoutState.

    ADDRESS → SHIPPING → PAYMENT → REVIEW

Only ADDRESS → SHIPPING is gated (an address must be selected). Going back is
always allowed; jumping is allowed up to the furthest step reached. Every
selection survives every move.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from kungfu import Result, Ok, Error

from checkoutflow._types import AddressId, Redirect
from checkoutflow.address import Address, default_address, contains
from checkoutflow.cart import Cart
from checkoutflow.checkout._types import (
    Step,
    Draft,
    AddressStep,
    ShippingStep,
    PaymentStep,
    ReviewStep,
    Position,
    CheckoutState,
)
from checkoutflow.config import CheckoutSettings, ShippingMethod, PaymentMethod
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import CheckoutError, CheckoutErrors

LOGIN_REDIRECT = Redirect("/login?callbackUrl=/checkout")
CART_REDIRECT = Redirect("/cart")

# ═══════════════════════════════════════════════════════════════════════════════
# Entry
# ═══════════════════════════════════════════════════════════════════════════════


def enter(*, authenticated: bool, cart: Cart) -> Redirect | None:
    """Entry guard. None means the customer may stay on checkout."""
    if not authenticated:
        return LOGIN_REDIRECT
    if cart.is_empty:
        return CART_REDIRECT
    return None


def initial_state(
    addresses: Iterable[Address] = (),
    settings: CheckoutSettings | None = None,
) -> CheckoutState:
    settings = settings or CheckoutSettings()
    default = default_address(addresses)
    return CheckoutState(
        position=AddressStep(
            draft=Draft(shipping=settings.default_shipping),
            address_id=default.id if default else None,
        )
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Navigation
# ═══════════════════════════════════════════════════════════════════════════════


def advance(state: CheckoutState) -> Result[CheckoutState, CheckoutError]:
    match state.position:
        case ReviewStep():
            return Error(CheckoutErrors.last_step())
        case position:
            return _move(state, Step(position.step + 1))


def back(state: CheckoutState) -> CheckoutState:
    match state.position:
        case AddressStep():
            return state
        case ShippingStep(draft, address_id, furthest):
            return replace(state, position=AddressStep(draft, address_id, furthest))
        case PaymentStep(draft, address_id, furthest):
            return replace(state, position=ShippingStep(draft, address_id, furthest))
        case ReviewStep(draft, address_id, furthest):
            return replace(state, position=PaymentStep(draft, address_id, furthest))


def jump(state: CheckoutState, target: Step) -> Result[CheckoutState, CheckoutError]:
    """Go straight to a step already reached."""
    if target > state.position.furthest:
        return Error(CheckoutErrors.step_locked(target))
    match _move(state, target):
        case Ok(moved):
            return Ok(moved)
        case Error(_):
            return Error(CheckoutErrors.step_locked(target))


def _move(state: CheckoutState, target: Step) -> Result[CheckoutState, CheckoutError]:
    match _place(state.position, target):
        case Ok(position):
            return Ok(replace(state, position=position))
        case Error(e):
            return Error(e)


def _place(current: Position, target: Step) -> Result[Position, CheckoutError]:
    draft = current.draft
    furthest = max(current.furthest, target)
    match target, current.address_id:
        case Step.ADDRESS, address_id:
            return Ok(AddressStep(draft, address_id, furthest))
        case _, None:
            return Error(CheckoutErrors.address_required())
        case Step.SHIPPING, address_id:
            return Ok(ShippingStep(draft, address_id, furthest))
        case Step.PAYMENT, address_id:
            return Ok(PaymentStep(draft, address_id, furthest))
        case _, address_id:
            return Ok(ReviewStep(draft, address_id, furthest))


# ═══════════════════════════════════════════════════════════════════════════════
# Selections
# ═══════════════════════════════════════════════════════════════════════════════


def select_address(state: CheckoutState, address_id: AddressId) -> CheckoutState:
    return replace(state, position=replace(state.position, address_id=address_id))


def select_shipping(state: CheckoutState, method: ShippingMethod) -> CheckoutState:
    return _with_draft(state, replace(state.draft, shipping=method))


def select_payment(state: CheckoutState, payment: PaymentMethod) -> CheckoutState:
    return _with_draft(state, replace(state.draft, payment=payment))


def set_notes(state: CheckoutState, notes: str) -> CheckoutState:
    return _with_draft(state, replace(state.draft, notes=notes))


def _with_draft(state: CheckoutState, draft: Draft) -> CheckoutState:
    return replace(state, position=replace(state.position, draft=draft))


# ═══════════════════════════════════════════════════════════════════════════════
# Coupon Slot
# ═══════════════════════════════════════════════════════════════════════════════


def apply_coupon(state: CheckoutState, coupon: CouponResult) -> CheckoutState:
    return replace(state, coupon=coupon, coupon_loading=False)


def remove_coupon(state: CheckoutState) -> CheckoutState:
    return replace(state, coupon=None)


def reconcile_coupon(state: CheckoutState, subtotal: int) -> CheckoutState:
    """Drop the coupon once the subtotal it was validated against is gone."""
    if state.coupon is not None and state.coupon.is_stale(subtotal):
        return remove_coupon(state)
    return state


# ═══════════════════════════════════════════════════════════════════════════════
# Submit Gate
# ═══════════════════════════════════════════════════════════════════════════════


def ready_to_submit(
    state: CheckoutState,
    addresses: Iterable[Address] | None = None,
) -> Result[ReviewStep, CheckoutError]:
    """
    Review position, if an order may be placed from here.

    `addresses` is the latest loaded list; the selected id must still be in it.
    Pass None when no list was loaded.
    """
    match state.position:
        case ReviewStep() as review:
            if addresses is not None and not contains(addresses, review.address_id):
                return Error(CheckoutErrors.stale_address(review.address_id.value))
            return Ok(review)
        case _:
            return Error(CheckoutErrors.not_at_review())


__all__ = (
    "LOGIN_REDIRECT",
    "CART_REDIRECT",
    "enter",
    "initial_state",
    "advance",
    "back",
    "jump",
    "select_address",
    "select_shipping",
    "select_payment",
    "set_notes",
    "apply_coupon",
    "remove_coupon",
    "reconcile_coupon",
    "ready_to_submit",
)
