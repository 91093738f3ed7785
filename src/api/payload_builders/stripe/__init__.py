"""Builders de payload do Stripe."""

from api.payload_builders.stripe.checkout_session import build_checkout_session_payload

__all__ = ["build_checkout_session_payload"]
