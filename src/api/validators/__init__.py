"""Validators dos corpos recebidos pelas rotas.

Estrutura:
- checkout/: agendamento, preferência, pedido, pagamento simples e reCAPTCHA

Todo erro vira ValidationError (400) antes de qualquer chamada de rede.
"""

__all__: list[str] = []
