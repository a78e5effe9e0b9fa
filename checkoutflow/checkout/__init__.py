"""
Checkout — four gated steps from cart to order.

    from checkoutflow import checkout as CO

    state = CO.initial_state(addresses)
    match CO.advance(state):
        case Ok(state):
            ...
        case Error(e):
            ...  # ADDRESS_REQUIRED

The session wires state, cart store and gateways together:

    session = CO.CheckoutSession(store, coupons=api, addresses=api, orders=api)
"""

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
from checkoutflow.checkout._machine import (
    LOGIN_REDIRECT,
    CART_REDIRECT,
    enter,
    initial_state,
    advance,
    back,
    jump,
    select_address,
    select_shipping,
    select_payment,
    set_notes,
    apply_coupon,
    remove_coupon,
    reconcile_coupon,
    ready_to_submit,
)
from checkoutflow.checkout._summary import (
    checkout_breakdown,
    ReviewLine,
    ReviewSummary,
    review_summary,
)
from checkoutflow.checkout._session import CheckoutSession

__all__ = (
    # Types
    "Step",
    "Draft",
    "AddressStep",
    "ShippingStep",
    "PaymentStep",
    "ReviewStep",
    "Position",
    "CheckoutState",
    # Machine
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
    # Summary
    "checkout_breakdown",
    "ReviewLine",
    "ReviewSummary",
    "review_summary",
    # Session
    "CheckoutSession",
)
