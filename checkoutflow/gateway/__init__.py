"""
Gateway — coupon validation, address book and order creation over HTTP.

    from checkoutflow import gateway as G

    async with G.HttpGateway(settings) as api:
        match await api.validate("DISKON10", subtotal=200_000):
            case Ok(coupon):
                ...
            case Error(e):
                ...
"""

from checkoutflow.gateway._types import OrderLine, OrderPayload
from checkoutflow.gateway._protocol import CouponGateway, AddressBook, OrderGateway
from checkoutflow.gateway._http import HttpGateway, RemoteRejected, NETWORK_MESSAGE

__all__ = (
    # Types
    "OrderLine",
    "OrderPayload",
    # Protocols
    "CouponGateway",
    "AddressBook",
    "OrderGateway",
    # HTTP
    "HttpGateway",
    "RemoteRejected",
    "NETWORK_MESSAGE",
)
