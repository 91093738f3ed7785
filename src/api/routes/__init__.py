"""Rotas HTTP da API — adapters de entrada por provedor.

Responsabilidades:
- Definir endpoints HTTP (checkout, OAuth, webhooks, health)
- Ler o corpo da requisição e delegar aos validators
- Delegar a execução para use_cases/connectors
- Respostas HTTP no formato esperado pelo frontend

Estrutura por provedor:
- routes/mercadopago/: preferência, OAuth, webhook e logs
- routes/pagbank/: checkout do agendamento, pagamento simples, status, webhook
- routes/pagseguro/: pedido em duas etapas e webhook
- routes/stripe/: sessão de checkout e webhook assinado
- routes/recaptcha/: diagnóstico do reCAPTCHA
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
