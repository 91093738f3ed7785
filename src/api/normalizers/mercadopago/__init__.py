"""Normalizer de respostas do Mercado Pago."""

from .normalizer import normalize_preference_response

__all__ = ["normalize_preference_response"]
