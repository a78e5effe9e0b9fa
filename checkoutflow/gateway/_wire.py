"""
Wire models — JSON bodies of the collaborator endpoints.

camelCase on the wire, snake_case in Python. Parsed at the border; domain code
only ever sees the dataclasses returned by `to_domain()`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from checkoutflow._types import AddressId
from checkoutflow.address import Address
from checkoutflow.coupon import CouponResult
from checkoutflow.gateway._types import OrderPayload


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ═══════════════════════════════════════════════════════════════════════════════
# POST /coupons/validate
# ═══════════════════════════════════════════════════════════════════════════════


class CouponValidateRequest(WireModel):
    code: str
    subtotal: int


class CouponInfo(WireModel):
    code: str
    description: str | None = None


class CouponValidateResponse(WireModel):
    coupon: CouponInfo
    discount_amount: int = Field(ge=0)

    def to_domain(self, subtotal: int) -> CouponResult:
        return CouponResult(
            code=self.coupon.code,
            discount_amount=self.discount_amount,
            validated_subtotal=subtotal,
            description=self.coupon.description,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# GET /addresses
# ═══════════════════════════════════════════════════════════════════════════════


class AddressRecord(WireModel):
    id: str
    recipient_name: str
    phone: str
    street: str
    city: str
    state: str
    zip_code: str
    label: str = ""
    is_default: bool = False

    def to_domain(self) -> Address:
        return Address(
            id=AddressId(self.id),
            recipient_name=self.recipient_name,
            phone=self.phone,
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            label=self.label,
            is_default=self.is_default,
        )


_ADDRESS_LIST = TypeAdapter(list[AddressRecord])


def parse_addresses(data: object) -> tuple[Address, ...]:
    return tuple(r.to_domain() for r in _ADDRESS_LIST.validate_python(data))


# ═══════════════════════════════════════════════════════════════════════════════
# POST /orders
# ═══════════════════════════════════════════════════════════════════════════════


class OrderItem(WireModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(ge=1)


class OrderRequest(WireModel):
    items: list[OrderItem]
    address_id: str
    shipping_method: str
    shipping_cost: int
    payment_method: str
    coupon_code: str | None = None
    notes: str | None = None

    @classmethod
    def from_domain(cls, payload: OrderPayload) -> OrderRequest:
        return cls(
            items=[
                OrderItem(
                    product_id=line.product_id.value,
                    variant_id=line.variant_id,
                    quantity=line.quantity,
                )
                for line in payload.lines
            ],
            address_id=payload.address_id.value,
            shipping_method=payload.shipping.name,
            shipping_cost=payload.shipping.price,
            payment_method=payload.payment.value,
            coupon_code=payload.coupon_code,
            notes=payload.notes or None,
        )


class OrderCreated(WireModel):
    id: str


# ═══════════════════════════════════════════════════════════════════════════════
# Failure body (any endpoint, non-2xx)
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorBody(WireModel):
    error: str | None = None


__all__ = (
    "WireModel",
    "CouponValidateRequest",
    "CouponInfo",
    "CouponValidateResponse",
    "AddressRecord",
    "parse_addresses",
    "OrderItem",
    "OrderRequest",
    "OrderCreated",
    "ErrorBody",
)
