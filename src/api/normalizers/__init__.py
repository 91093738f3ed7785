"""Normalizers por provedor — resposta crua → PaymentResult.

Estrutura:
- common.py: JSON obrigatório, busca de links, erros de forma
- mercadopago/: preferência (init_point)
- pagbank/: pedido, cobrança e status
- stripe/: checkout session (url)

Corpo não-JSON vira UpstreamUnparseableError; campo esperado ausente vira
ResponseShapeError. Nenhum normalizer deixa escapar exceção genérica.
"""

from .mercadopago import normalize_preference_response
from .pagbank import (
    normalize_charge_response,
    normalize_order_response,
    normalize_payment_link_response,
    normalize_status_response,
)
from .stripe import normalize_checkout_session_response

__all__ = [
    "normalize_charge_response",
    "normalize_checkout_session_response",
    "normalize_order_response",
    "normalize_payment_link_response",
    "normalize_preference_response",
    "normalize_status_response",
]
