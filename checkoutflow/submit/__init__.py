"""
Submit — turn the reviewed checkout into an order.

    from checkoutflow import submit as Sub

    submitter = Sub.OrderSubmitter(gateway, cart_store)
    match await submitter.submit(cart, address_id, shipping, payment):
        case Ok(redirect):
            ...  # /checkout-success?orderId=...
        case Error(e):
            ...  # cart restored, retry allowed
"""

from checkoutflow.submit._commit import (
    Compensator,
    CommitStep,
    CommitResult,
    CommitError,
    step,
    run_chain,
)
from checkoutflow.submit._submitter import OrderSubmitter, success_redirect, SUCCESS_PATH

__all__ = (
    # Commit
    "Compensator",
    "CommitStep",
    "CommitResult",
    "CommitError",
    "step",
    "run_chain",
    # Submitter
    "OrderSubmitter",
    "success_redirect",
    "SUCCESS_PATH",
)
