"""Builder da preferência de Checkout Pro do Mercado Pago."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.common import epoch_ms, generate_idempotency_key, to_currency
from app.domain.booking import DEFAULT_TAX_ID
from app.domain.payment import PaymentPayload
from config.settings.mercadopago import STATEMENT_DESCRIPTOR

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest


def _build_payer(booking: BookingRequest) -> dict[str, Any]:
    payer: dict[str, Any] = {"name": booking.student_name, "email": booking.email}
    if booking.tax_id and booking.tax_id != DEFAULT_TAX_ID:
        payer["identification"] = {
            "type": "CPF" if len(booking.tax_id) == 11 else "CNPJ",
            "number": booking.tax_id,
        }
    return payer


def build_preference_payload(booking: BookingRequest, api_base_url: str) -> PaymentPayload:
    """Monta a preferência com back_urls e notification_url da API pública.

    Args:
        booking: Pedido validado.
        api_base_url: NEXT_PUBLIC_API_URL sem barra final.

    Returns:
        PaymentPayload com valores em reais (o Mercado Pago não usa centavos).
    """
    body = {
        "items": [
            {
                "title": item.name,
                "quantity": item.quantity,
                "unit_price": to_currency(item.unit_amount),
                "currency_id": "BRL",
            }
            for item in booking.line_items
        ],
        "payer": _build_payer(booking),
        "back_urls": {
            "success": f"{api_base_url}/success",
            "failure": f"{api_base_url}/failure",
            "pending": f"{api_base_url}/pending",
        },
        "auto_return": "approved",
        "notification_url": f"{api_base_url}/api/mercadopago/webhook",
        "statement_descriptor": STATEMENT_DESCRIPTOR,
        "external_reference": str(epoch_ms()),
    }
    return PaymentPayload(
        provider="mercadopago",
        body=body,
        idempotency_key=generate_idempotency_key("preference"),
    )
