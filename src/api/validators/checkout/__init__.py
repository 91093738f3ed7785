"""Validators do checkout — corpo HTTP cru → tipos do domínio.

Uso:
    from api.validators.checkout import validate_order_request

    booking = validate_order_request(body)  # lança ValidationError (400)
"""

from api.validators.checkout.fields import parse_amount
from api.validators.checkout.requests import (
    AgendamentoCheckout,
    validate_agendamento_checkout,
    validate_order_request,
    validate_payment_status_query,
    validate_preference_request,
    validate_recaptcha_request,
    validate_simple_payment,
)

__all__ = [
    "AgendamentoCheckout",
    "parse_amount",
    "validate_agendamento_checkout",
    "validate_order_request",
    "validate_payment_status_query",
    "validate_preference_request",
    "validate_recaptcha_request",
    "validate_simple_payment",
]
