"""Normalizer de respostas do Stripe."""

from .normalizer import normalize_checkout_session_response

__all__ = ["normalize_checkout_session_response"]
