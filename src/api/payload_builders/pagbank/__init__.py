"""Builders de payload do PagBank (pedidos, cobranças)."""

from api.payload_builders.pagbank.order import (
    build_charge_payload,
    build_order_payload,
    build_two_step_order_payload,
)

__all__ = [
    "build_charge_payload",
    "build_order_payload",
    "build_two_step_order_payload",
]
