"""Builders de payload do Mercado Pago."""

from api.payload_builders.mercadopago.preference import build_preference_payload

__all__ = ["build_preference_payload"]
