"""Conector Stripe (Checkout Sessions e webhook assinado)."""

from api.connectors.stripe.provider import StripeProvider
from api.connectors.stripe.signature import (
    InvalidEventError,
    StripeSignatureError,
    compute_signature,
    parse_stripe_event,
    verify_stripe_signature,
)

__all__ = [
    "InvalidEventError",
    "StripeProvider",
    "StripeSignatureError",
    "compute_signature",
    "parse_stripe_event",
    "verify_stripe_signature",
]
