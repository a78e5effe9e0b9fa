"""
Checkout errors — one value type, four kinds.

Errors travel as `Error(CheckoutError)` inside `Result`; nothing here is raised
across a step boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ErrorKind(Enum):
    """Kinds of checkout failures."""

    VALIDATION = auto()  # Missing/invalid local input, blocks the transition
    REMOTE_REJECTION = auto()  # Collaborator said no (coupon, order rules)
    NETWORK_FAILURE = auto()  # Request could not complete
    STATE_INCONSISTENCY = auto()  # Earlier selection no longer valid


@dataclass(frozen=True, slots=True)
class CheckoutError:
    """
    User-facing checkout failure.

    `message` is what the customer sees. For REMOTE_REJECTION it is the
    collaborator's own message, verbatim.
    """

    kind: ErrorKind
    code: str
    message: str

    @property
    def is_retryable(self) -> bool:
        return self.kind in (ErrorKind.REMOTE_REJECTION, ErrorKind.NETWORK_FAILURE)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CheckoutErrors:
    @staticmethod
    def address_required() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "ADDRESS_REQUIRED",
            "Please select a shipping address first",
        )

    @staticmethod
    def stale_address(address_id: str) -> CheckoutError:
        return CheckoutError(
            ErrorKind.STATE_INCONSISTENCY,
            "ADDRESS_STALE",
            f"Address {address_id} is no longer available, please select another",
        )

    @staticmethod
    def empty_coupon() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION, "EMPTY_COUPON", "Enter a coupon code"
        )

    @staticmethod
    def coupon_in_flight() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "COUPON_IN_FLIGHT",
            "Coupon is already being checked",
        )

    @staticmethod
    def stale_coupon(code: str) -> CheckoutError:
        return CheckoutError(
            ErrorKind.STATE_INCONSISTENCY,
            "COUPON_STALE",
            f"Your cart changed, please apply {code} again",
        )

    @staticmethod
    def empty_cart() -> CheckoutError:
        return CheckoutError(ErrorKind.VALIDATION, "EMPTY_CART", "Your cart is empty")

    @staticmethod
    def item_not_found(item_id: str) -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION, "ITEM_NOT_FOUND", f"Item {item_id} is not in the cart"
        )

    @staticmethod
    def out_of_stock(item_id: str, requested: int, stock: int) -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "OUT_OF_STOCK",
            f"{item_id}: requested {requested}, only {stock} in stock",
        )

    @staticmethod
    def invalid_quantity(quantity: int) -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "INVALID_QUANTITY",
            f"Quantity must be positive, got {quantity}",
        )

    @staticmethod
    def step_locked(target: int) -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "STEP_LOCKED",
            f"Step {target} is not available yet",
        )

    @staticmethod
    def last_step() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "LAST_STEP",
            "Review is the last step, place your order to finish",
        )

    @staticmethod
    def not_at_review() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "NOT_AT_REVIEW",
            "Orders can only be placed from the review step",
        )

    @staticmethod
    def submission_in_flight() -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "SUBMISSION_IN_FLIGHT",
            "Your order is already being processed",
        )

    @staticmethod
    def session_closed() -> CheckoutError:
        return CheckoutError(
            ErrorKind.STATE_INCONSISTENCY,
            "SESSION_CLOSED",
            "Checkout session has ended",
        )

    @staticmethod
    def rejected(code: str, message: str | None, fallback: str) -> CheckoutError:
        return CheckoutError(ErrorKind.REMOTE_REJECTION, code, message or fallback)

    @staticmethod
    def network(code: str, message: str) -> CheckoutError:
        return CheckoutError(ErrorKind.NETWORK_FAILURE, code, message)

    @staticmethod
    def cart_store(message: str) -> CheckoutError:
        return CheckoutError(ErrorKind.STATE_INCONSISTENCY, "CART_STORE_ERROR", message)

    @staticmethod
    def cart_not_restored(order_message: str) -> CheckoutError:
        return CheckoutError(
            ErrorKind.STATE_INCONSISTENCY,
            "CART_STORE_ERROR",
            f"{order_message}. Your cart could not be restored, please check it before retrying",
        )

    @staticmethod
    def unknown_shipping(method_id: str) -> CheckoutError:
        return CheckoutError(
            ErrorKind.VALIDATION,
            "UNKNOWN_SHIPPING",
            f"Shipping method {method_id} is not available",
        )


__all__ = ("ErrorKind", "CheckoutError", "CheckoutErrors")
