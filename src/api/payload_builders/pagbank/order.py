"""Builders de pedido e cobrança da API de Orders do PagBank.

Valores sempre em centavos. ``build_order_payload`` gera o pedido com
pagamento embutido (cartão em ``charges`` ou PIX em ``qr_codes``);
``build_two_step_order_payload`` + ``build_charge_payload`` cobrem o
fluxo em duas etapas (pedido, depois cobrança).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.common import (
    generate_idempotency_key,
    reference_id,
    to_minor_units,
)
from app.domain.payment import PaymentPayload

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest, CardData

CHARGE_DESCRIPTION = "Pagamento Dancing Patinação"
SOFT_DESCRIPTOR = "Dancing"


def _customer(booking: BookingRequest) -> dict[str, Any]:
    customer: dict[str, Any] = {
        "name": booking.student_name,
        "email": booking.email,
        "tax_id": booking.tax_id,
    }
    phones = _phones(booking.phone)
    if phones:
        customer["phones"] = phones
    return customer


def _phones(phone: str) -> list[dict[str, str]]:
    national = phone[2:] if phone.startswith("55") and len(phone) > 11 else phone
    if len(national) not in (10, 11):
        return []
    return [
        {
            "country": "55",
            "area": national[:2],
            "number": national[2:],
            "type": "MOBILE" if len(national) == 11 else "HOME",
        }
    ]


def _items(booking: BookingRequest) -> list[dict[str, Any]]:
    return [
        {
            "name": item.name,
            "quantity": item.quantity,
            "unit_amount": to_minor_units(item.unit_amount),
        }
        for item in booking.line_items
    ]


def _single_item(booking: BookingRequest) -> dict[str, Any]:
    """Um item, quantidade 1, no valor total do pedido."""
    return {
        "reference_id": reference_id("ITEM"),
        "name": booking.line_items[0].name,
        "quantity": 1,
        "unit_amount": to_minor_units(booking.amount),
    }


def _card(card: CardData) -> dict[str, Any]:
    return {
        "number": card.number,
        "exp_month": card.exp_month,
        "exp_year": card.exp_year,
        "security_code": card.security_code,
        "holder": {"name": card.holder_name},
    }


def build_order_payload(
    booking: BookingRequest,
    notification_url: str | None = None,
) -> PaymentPayload:
    """Pedido ``AULA_{ms}`` com cobrança em cartão ou QR code PIX."""
    amount = to_minor_units(booking.amount)
    body: dict[str, Any] = {
        "reference_id": reference_id("AULA"),
        "customer": _customer(booking),
        "items": _items(booking),
    }
    if notification_url:
        body["notification_urls"] = [notification_url]

    if booking.is_card_payment and booking.card is not None:
        body["charges"] = [
            {
                "reference_id": reference_id("CHARGE"),
                "description": booking.description or CHARGE_DESCRIPTION,
                "amount": {"value": amount, "currency": "BRL"},
                "payment_method": {
                    "type": "CREDIT_CARD",
                    "installments": 1,
                    "capture": True,
                    "soft_descriptor": SOFT_DESCRIPTOR,
                    "card": _card(booking.card),
                },
            }
        ]
    else:
        body["qr_codes"] = [{"amount": {"value": amount}}]

    return PaymentPayload(
        provider="pagbank",
        body=body,
        idempotency_key=generate_idempotency_key("order"),
    )


def build_two_step_order_payload(
    booking: BookingRequest,
    notification_url: str | None = None,
) -> PaymentPayload:
    """Pedido ``ORDER_{ms}`` sem pagamento (a cobrança vem depois).

    O pedido leva um único item no valor de ``booking.amount``, o mesmo
    valor da cobrança montada por ``build_charge_payload``.
    """
    body: dict[str, Any] = {
        "reference_id": reference_id("ORDER"),
        "customer": _customer(booking),
        "items": [_single_item(booking)],
    }
    if notification_url:
        body["notification_urls"] = [notification_url]
    return PaymentPayload(
        provider="pagbank",
        body=body,
        idempotency_key=generate_idempotency_key("order"),
    )


def build_charge_payload(booking: BookingRequest) -> PaymentPayload:
    """Cobrança ``CHARGE_{ms}`` em cartão, com captura imediata."""
    payment_method: dict[str, Any] = {
        "type": "CREDIT_CARD",
        "installments": 1,
        "capture": True,
        "soft_descriptor": SOFT_DESCRIPTOR,
    }
    if booking.card is not None:
        payment_method["card"] = _card(booking.card)
    else:
        payment_method["card"] = {"holder": {"name": booking.student_name}, "store": False}

    body = {
        "reference_id": reference_id("CHARGE"),
        "description": CHARGE_DESCRIPTION,
        "amount": {"value": to_minor_units(booking.amount), "currency": "BRL"},
        "payment_method": payment_method,
    }
    return PaymentPayload(
        provider="pagbank",
        body=body,
        idempotency_key=generate_idempotency_key("charge"),
    )
