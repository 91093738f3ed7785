"""Builder da Checkout Session do Stripe.

O corpo é montado como dict aninhado e passado como kwargs para
``stripe.checkout.Session.create``; o SDK cuida do form encoding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.common import generate_idempotency_key, to_minor_units
from app.domain.payment import PaymentPayload

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest

DEFAULT_PRODUCT_NAME = "Pagamento Dancing Patinação"
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


def build_checkout_session_payload(
    booking: BookingRequest,
    success_url: str,
    cancel_url: str,
) -> PaymentPayload:
    """Sessão ``mode=payment`` com um único item no valor total."""
    product_name = booking.items[0].name if booking.items else DEFAULT_PRODUCT_NAME
    separator = "&" if "?" in success_url else "?"
    metadata = {
        "customer_name": booking.student_name,
        "customer_tax_id": booking.tax_id,
    }
    body: dict[str, Any] = {
        "mode": "payment",
        "payment_method_types": ["card"],
        "line_items": [
            {
                "price_data": {
                    "currency": "brl",
                    "unit_amount": to_minor_units(booking.amount),
                    "product_data": {
                        "name": product_name or DEFAULT_PRODUCT_NAME,
                        "description": f"Pagamento para {booking.student_name}",
                    },
                },
                "quantity": 1,
            }
        ],
        "success_url": f"{success_url}{separator}session_id={SESSION_ID_PLACEHOLDER}",
        "cancel_url": cancel_url,
        "customer_email": booking.email,
        "metadata": metadata,
        "payment_intent_data": {"metadata": dict(metadata)},
    }
    return PaymentPayload(
        provider="stripe",
        body=body,
        idempotency_key=generate_idempotency_key("checkout"),
    )
