"""Conectores dos provedores externos (pagamento, OAuth, reCAPTCHA).

Estrutura:
- http_base.py: cliente httpx com timeout, sem retry
- mercadopago/: preferência e OAuth
- pagbank/: pedidos, cobranças e status
- stripe/: checkout session e assinatura de webhook
- recaptcha/: siteverify
"""

from api.connectors.http_base import HttpClient, HttpClientConfig

__all__ = ["HttpClient", "HttpClientConfig"]
