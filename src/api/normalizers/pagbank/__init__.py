"""Normalizer de respostas do PagBank (pedidos, cobranças, status)."""

from .normalizer import (
    STATUS_LABELS,
    UNPARSEABLE_MESSAGE,
    normalize_charge_response,
    normalize_order_response,
    normalize_payment_link_response,
    normalize_status_response,
    status_label,
)

__all__ = [
    "STATUS_LABELS",
    "UNPARSEABLE_MESSAGE",
    "normalize_charge_response",
    "normalize_order_response",
    "normalize_payment_link_response",
    "normalize_status_response",
    "status_label",
]
