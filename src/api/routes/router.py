"""Agregador de rotas — registra os routers de cada provedor.

Este módulo é responsável por criar o router principal da API
e incluir os sub-routers sob o prefixo ``/api``.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.mercadopago.router import router as mercadopago_router
from api.routes.pagbank.router import router as pagbank_router
from api.routes.pagseguro.router import router as pagseguro_router
from api.routes.recaptcha.router import router as recaptcha_router
from api.routes.stripe.router import router as stripe_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(mercadopago_router, prefix="/api/mercadopago", tags=["mercadopago"])
    api_router.include_router(pagbank_router, prefix="/api/pagbank", tags=["pagbank"])
    api_router.include_router(pagseguro_router, prefix="/api/pagseguro", tags=["pagseguro"])
    api_router.include_router(stripe_router, prefix="/api/stripe", tags=["stripe"])
    api_router.include_router(recaptcha_router, prefix="/api", tags=["recaptcha"])

    return api_router
