"""
HTTP gateway — httpx client for the coupon, address and order endpoints.

Exceptions stop here: every call is lifted with `catching_async` and comes
back as a Result.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
from combinators import lift as L
from pydantic import ValidationError

from checkoutflow._types import Lazy, OrderId
from checkoutflow.address import Address
from checkoutflow.config import CheckoutSettings
from checkoutflow.coupon import CouponResult
from checkoutflow.errors import CheckoutError, CheckoutErrors
from checkoutflow.gateway._types import OrderPayload
from checkoutflow.gateway._wire import (
    CouponValidateRequest,
    CouponValidateResponse,
    OrderRequest,
    OrderCreated,
    ErrorBody,
    parse_addresses,
)
from checkoutflow.log import get_logger

log = get_logger(__name__)

NETWORK_MESSAGE = "Could not reach the server, please try again"


class RemoteRejected(Exception):
    """Non-2xx response. Converted to REMOTE_REJECTION before leaving the gateway."""

    def __init__(self, status: int, message: str | None) -> None:
        super().__init__(message or f"HTTP {status}")
        self.status = status
        self.message = message


class HttpGateway:
    """
    Coupon + address book + order gateway over one httpx.AsyncClient.

    Example:
        async with HttpGateway(settings) as gateway:
            result = await gateway.validate("DISKON10", 200_000)
    """

    def __init__(
        self,
        settings: CheckoutSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=settings.api_base_url,
                timeout=settings.request_timeout,
            )
        self._client = client

    async def __aenter__(self) -> HttpGateway:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ─── CouponGateway ────────────────────────────────────────────────────────

    def validate(self, code: str, subtotal: int) -> Lazy[CouponResult, CheckoutError]:
        body = CouponValidateRequest(code=code, subtotal=subtotal).to_json()

        async def impl() -> CouponResult:
            data = await self._send("POST", "/coupons/validate", body)
            return CouponValidateResponse.model_validate(data).to_domain(subtotal)

        return L.catching_async(
            impl, on_error=_to_checkout_error("COUPON_REJECTED", "Invalid coupon")
        )

    # ─── AddressBook ──────────────────────────────────────────────────────────

    def list_addresses(self) -> Lazy[tuple[Address, ...], CheckoutError]:
        async def impl() -> tuple[Address, ...]:
            return parse_addresses(await self._send("GET", "/addresses"))

        return L.catching_async(
            impl,
            on_error=_to_checkout_error("ADDRESSES_UNAVAILABLE", "Could not load addresses"),
        )

    # ─── OrderGateway ─────────────────────────────────────────────────────────

    def create_order(self, payload: OrderPayload) -> Lazy[OrderId, CheckoutError]:
        body = OrderRequest.from_domain(payload).to_json()

        async def impl() -> OrderId:
            data = await self._send("POST", "/orders", body)
            return OrderId(OrderCreated.model_validate(data).id)

        return L.catching_async(
            impl, on_error=_to_checkout_error("ORDER_REJECTED", "Failed to create order")
        )

    # ─── Transport ────────────────────────────────────────────────────────────

    async def _send(self, method: str, path: str, body: dict[str, object] | None = None) -> Any:
        response = await self._client.request(method, path, json=body)
        log.debug("gateway_response", method=method, path=path, status=response.status_code)
        if response.is_success:
            return response.json()
        raise RemoteRejected(response.status_code, _error_message(response))


def _error_message(response: httpx.Response) -> str | None:
    try:
        return ErrorBody.model_validate(response.json()).error
    except ValueError:
        # Not JSON, or JSON without a usable {error}
        return None


def _to_checkout_error(code: str, fallback: str) -> Callable[[Exception], CheckoutError]:
    def convert(exc: Exception) -> CheckoutError:
        match exc:
            case RemoteRejected(status=status, message=message):
                log.info("gateway_rejected", code=code, status=status, message=message)
                return CheckoutErrors.rejected(code, message, fallback)
            case httpx.HTTPError():
                log.warning("gateway_unreachable", code=code, error=str(exc))
                return CheckoutErrors.network("NETWORK_ERROR", NETWORK_MESSAGE)
            case ValidationError() | ValueError():
                log.warning("gateway_bad_response", code=code, error=str(exc))
                return CheckoutErrors.network("UNEXPECTED_RESPONSE", NETWORK_MESSAGE)
            case _:
                log.exception("gateway_failed", code=code)
                return CheckoutErrors.network("NETWORK_ERROR", NETWORK_MESSAGE)

    return convert


__all__ = ("HttpGateway", "RemoteRejected", "NETWORK_MESSAGE")
