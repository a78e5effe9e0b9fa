"""
Shared fixtures: settings and an in-process FastAPI stub of the shop API.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from checkoutflow.config import CheckoutSettings
from checkoutflow.gateway import HttpGateway
from tests.fakes import address_json

API_BASE = "http://shop.test/api"


@pytest.fixture
def settings() -> CheckoutSettings:
    return CheckoutSettings().with_api(API_BASE)


# ═══════════════════════════════════════════════════════════════════════════════
# Stub Shop API (FastAPI)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class StubShop:
    """Server-side state of the stub. Tests tweak it before calling."""

    coupons: dict[str, int] = field(default_factory=lambda: {"DISKON10": 10})  # percent
    addresses: list[dict[str, Any]] = field(
        default_factory=lambda: [address_json("home", is_default=True), address_json("office")]
    )
    order_error: tuple[int, Any] | None = None  # (status, body)
    orders: list[dict[str, Any]] = field(default_factory=list)
    requests: list[str] = field(default_factory=list)


def build_app(shop: StubShop) -> FastAPI:
    app = FastAPI()

    @app.post("/api/coupons/validate")
    async def validate_coupon(request: Request) -> JSONResponse:
        shop.requests.append("validate")
        body = await request.json()
        percent = shop.coupons.get(body["code"])
        if percent is None:
            return JSONResponse({"error": "Coupon not found or expired"}, status_code=400)
        return JSONResponse(
            {
                "coupon": {"code": body["code"], "description": f"{percent}% off"},
                "discountAmount": body["subtotal"] * percent // 100,
            }
        )

    @app.get("/api/addresses")
    async def list_addresses() -> JSONResponse:
        shop.requests.append("addresses")
        return JSONResponse(shop.addresses)

    @app.post("/api/orders")
    async def create_order(request: Request) -> JSONResponse:
        shop.requests.append("orders")
        if shop.order_error is not None:
            status, body = shop.order_error
            return JSONResponse(body, status_code=status)
        shop.orders.append(await request.json())
        return JSONResponse({"id": f"ord-{len(shop.orders)}"}, status_code=201)

    return app


@pytest.fixture
def shop() -> StubShop:
    return StubShop()


@pytest.fixture
async def api(shop: StubShop, settings: CheckoutSettings) -> AsyncIterator[HttpGateway]:
    transport = httpx.ASGITransport(app=build_app(shop))
    async with httpx.AsyncClient(transport=transport, base_url=settings.api_base_url) as client:
        yield HttpGateway(settings, client=client)
