from __future__ import annotations

from kungfu import Ok, Error

from checkoutflow import AddressId, Redirect
from checkoutflow import checkout as CO
from checkoutflow.cart import Cart, Variant
from checkoutflow.checkout import Step, CheckoutState
from checkoutflow.config import CheckoutSettings, PaymentMethod, SHIPPING_METHODS
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import ErrorKind
from tests.fakes import address, cart_of, line

HOME = AddressId("home")


def at(state: CheckoutState, *moves: str) -> CheckoutState:
    for move in moves:
        match move:
            case "advance":
                result = CO.advance(state)
            case _:
                result = Ok(CO.back(state))
        match result:
            case Ok(state):
                pass
            case Error(e):
                raise AssertionError(f"{move} refused: {e}")
    return state


def review_state() -> CheckoutState:
    return at(CO.select_address(CO.initial_state(), HOME), "advance", "advance", "advance")


# ═══════════════════════════════════════════════════════════════════════════════
# Initial state and entry
# ═══════════════════════════════════════════════════════════════════════════════


def test_initial_state_defaults() -> None:
    state = CO.initial_state()
    assert state.step is Step.ADDRESS
    assert state.address_id is None
    assert state.draft.shipping == SHIPPING_METHODS[0]
    assert state.draft.payment is PaymentMethod.BANK_TRANSFER
    assert state.draft.notes == ""
    assert state.coupon is None and not state.coupon_loading and not state.submitting


def test_initial_state_selects_default_address() -> None:
    state = CO.initial_state([address("office"), address("home", is_default=True)])
    assert state.address_id == HOME


def test_initial_state_without_default_selects_nothing() -> None:
    assert CO.initial_state([address("office")]).address_id is None


def test_initial_shipping_follows_settings() -> None:
    express_first = CheckoutSettings(shipping_methods=(SHIPPING_METHODS[1], SHIPPING_METHODS[0]))
    assert CO.initial_state(settings=express_first).draft.shipping.id == "EXPRESS"


def test_entry_guard() -> None:
    cart = cart_of(line("tee", 75_000))
    assert CO.enter(authenticated=False, cart=cart) == Redirect("/login?callbackUrl=/checkout")
    assert CO.enter(authenticated=True, cart=Cart()) == Redirect("/cart")
    assert CO.enter(authenticated=True, cart=cart) is None


def test_step_labels() -> None:
    assert [s.label for s in Step] == ["Address", "Shipping", "Payment", "Review"]


# ═══════════════════════════════════════════════════════════════════════════════
# Gating
# ═══════════════════════════════════════════════════════════════════════════════


def test_advance_without_address_is_refused() -> None:
    state = CO.initial_state()
    match CO.advance(state):
        case Error(e):
            assert e.kind is ErrorKind.VALIDATION
            assert e.code == "ADDRESS_REQUIRED"
            assert e.message == "Please select a shipping address first"
        case Ok(_):
            raise AssertionError("advanced without an address")


def test_advance_with_address_reaches_shipping() -> None:
    state = at(CO.select_address(CO.initial_state(), HOME), "advance")
    assert isinstance(state.position, CO.ShippingStep)
    assert state.address_id == HOME


def test_shipping_and_payment_advance_unconditionally() -> None:
    assert review_state().step is Step.REVIEW


def test_advance_from_review_is_refused() -> None:
    match CO.advance(review_state()):
        case Error(e):
            assert e.code == "LAST_STEP"
        case Ok(_):
            raise AssertionError("moved past review")


def test_back_at_address_stays() -> None:
    state = CO.initial_state()
    assert CO.back(state) == state


def test_back_keeps_every_selection() -> None:
    state = review_state()
    state = CO.select_shipping(state, SHIPPING_METHODS[2])
    state = CO.select_payment(state, PaymentMethod.OVO)
    state = CO.set_notes(state, "Ring twice")

    state = at(state, "back", "back", "back")

    assert state.step is Step.ADDRESS
    assert state.address_id == HOME
    assert state.draft.shipping == SHIPPING_METHODS[2]
    assert state.draft.payment is PaymentMethod.OVO
    assert state.draft.notes == "Ring twice"


def test_jump_back_and_forward_within_reached() -> None:
    state = review_state()
    match CO.jump(state, Step.ADDRESS):
        case Ok(first):
            assert first.step is Step.ADDRESS
        case Error(e):
            raise AssertionError(e)
    match CO.jump(first, Step.REVIEW):
        case Ok(last):
            assert last.step is Step.REVIEW
        case Error(e):
            raise AssertionError(e)


def test_jump_past_furthest_is_locked() -> None:
    state = at(CO.select_address(CO.initial_state(), HOME), "advance")
    match CO.jump(state, Step.PAYMENT):
        case Error(e):
            assert e.code == "STEP_LOCKED"
        case Ok(_):
            raise AssertionError("skipped ahead")


def test_selection_preserves_step() -> None:
    state = at(CO.select_address(CO.initial_state(), HOME), "advance")
    assert CO.select_payment(state, PaymentMethod.DANA).step is Step.SHIPPING
    assert CO.select_address(state, AddressId("office")).step is Step.SHIPPING


# ═══════════════════════════════════════════════════════════════════════════════
# Coupon slot and submit gate
# ═══════════════════════════════════════════════════════════════════════════════


def test_coupon_independent_of_step() -> None:
    state = at(CO.select_address(CO.initial_state(), HOME), "advance", "advance")
    coupon = CouponResult("DISKON10", 20_000, 200_000)
    with_coupon = CO.apply_coupon(state, coupon)
    assert with_coupon.step is Step.PAYMENT
    assert with_coupon.coupon == coupon
    assert CO.remove_coupon(with_coupon).step is Step.PAYMENT
    assert CO.remove_coupon(with_coupon).coupon is None


def test_reconcile_drops_coupon_when_subtotal_changes() -> None:
    state = CO.apply_coupon(CO.initial_state(), CouponResult("DISKON10", 20_000, 200_000))
    assert CO.reconcile_coupon(state, 200_000).coupon is not None
    assert CO.reconcile_coupon(state, 125_000).coupon is None


def test_ready_to_submit_only_from_review() -> None:
    state = at(CO.select_address(CO.initial_state(), HOME), "advance")
    match CO.ready_to_submit(state):
        case Error(e):
            assert e.code == "NOT_AT_REVIEW"
        case Ok(_):
            raise AssertionError("submit allowed before review")


def test_ready_to_submit_rejects_stale_address() -> None:
    match CO.ready_to_submit(review_state(), [address("office")]):
        case Error(e):
            assert e.kind is ErrorKind.STATE_INCONSISTENCY
        case Ok(_):
            raise AssertionError("deleted address accepted")


def test_ready_to_submit_accepts_listed_address() -> None:
    match CO.ready_to_submit(review_state(), [address("home")]):
        case Ok(review):
            assert review.address_id == HOME
        case Error(e):
            raise AssertionError(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout totals
# ═══════════════════════════════════════════════════════════════════════════════


def test_checkout_breakdown_uses_nominal_shipping_and_tax() -> None:
    cart = cart_of(line("bag", 200_000))
    state = CO.apply_coupon(review_state(), CouponResult("DISKON10", 20_000, 200_000))
    b = CO.checkout_breakdown(cart, state, CheckoutSettings())
    assert b.shipping_cost == 15_000
    assert b.tax == 22_000
    assert b.total == 180_000 + 15_000 + 22_000


def test_checkout_breakdown_no_threshold_waiver() -> None:
    cart = cart_of(line("sofa", 1_000_000))
    state = CO.select_shipping(review_state(), SHIPPING_METHODS[2])
    assert CO.checkout_breakdown(cart, state, CheckoutSettings()).shipping_cost == 50_000


def test_review_summary() -> None:
    cart = cart_of(line("tee", 75_000, quantity=2, variant=Variant("xl", "Size", "XL")))
    state = CO.set_notes(CO.select_payment(review_state(), PaymentMethod.COD), "Fragile")
    summary = CO.review_summary(cart, state, [address("home")], CheckoutSettings())
    assert summary.lines[0].variant == "Size: XL"
    assert summary.lines[0].line_total == 150_000
    assert summary.address is not None and summary.address.id == HOME
    assert summary.shipping_name == "Regular"
    assert summary.payment_label == "Cash on Delivery"
    assert summary.notes == "Fragile"
