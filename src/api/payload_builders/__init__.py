"""Payload builders por provedor — construção dos corpos enviados.

Estrutura:
- common.py: centavos (ROUND_HALF_UP), idempotência, reference ids
- mercadopago/: preferência do Checkout Pro
- pagbank/: pedidos (PIX/cartão) e cobranças em duas etapas
- stripe/: Checkout Session (kwargs do SDK ``stripe``)

Cada provedor tem seus próprios builders, garantindo SRP e isolamento de falhas.
"""

from api.payload_builders.common import generate_idempotency_key, to_minor_units

__all__ = ["generate_idempotency_key", "to_minor_units"]
