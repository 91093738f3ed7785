"""Conector Mercado Pago (Checkout Pro e OAuth)."""

from api.connectors.mercadopago.oauth import MercadoPagoOAuthClient
from api.connectors.mercadopago.provider import MercadoPagoProvider

__all__ = ["MercadoPagoOAuthClient", "MercadoPagoProvider"]
