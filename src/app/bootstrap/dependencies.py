"""Factories de dependências — provedores, token store e serviços.

Cada ``create_*`` monta uma implementação concreta a partir das settings.
Os ``get_*`` com cache são os singletons usados pelas rotas via
``fastapi.Depends`` (testes substituem com ``app.dependency_overrides``).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from api.connectors import HttpClient, HttpClientConfig
from api.connectors.mercadopago import MercadoPagoOAuthClient, MercadoPagoProvider
from api.connectors.pagbank import (
    PagBankPaymentLinkProvider,
    PagBankProvider,
    PagBankTwoStepProvider,
)
from api.connectors.recaptcha import RecaptchaClient
from api.connectors.stripe import StripeProvider
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.stores import (
    FileTokenStore,
    FirestoreTokenStore,
    MemoryPaymentEventLog,
    MemoryTokenStore,
    RedisTokenStore,
)
from app.services import OAuthTokenRefresher
from config.settings import (
    get_base_settings,
    get_mercadopago_settings,
    get_pagbank_settings,
    get_recaptcha_settings,
    get_stripe_settings,
    get_token_store_settings,
)

if TYPE_CHECKING:
    from app.protocols.token_store import TokenStoreProtocol

logger = logging.getLogger(__name__)


def create_http_client(component: str, timeout_seconds: float) -> HttpClient:
    """Cliente HTTP com timeout por provedor (sem retry)."""
    return HttpClient(HttpClientConfig(timeout_seconds=timeout_seconds, component=component))


# ──────────────────────────────────────────────────────────────────────────────
# Token Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_token_store() -> TokenStoreProtocol:
    """Cria token store baseado na configuração.

    Lê TOKEN_STORE_BACKEND da env:
    - "file": FileTokenStore (padrão, mp_token.json)
    - "memory": MemoryTokenStore (dev only)
    - "redis": RedisTokenStore
    - "firestore": FirestoreTokenStore

    Returns:
        Implementação de TokenStoreProtocol
    """
    settings = get_token_store_settings()
    backend = settings.backend

    if backend == "redis":
        store: TokenStoreProtocol = RedisTokenStore(
            create_async_redis_client(), key=settings.redis_key
        )
    elif backend == "firestore":
        store = FirestoreTokenStore(create_firestore_client(), collection_name=settings.collection)
    elif backend == "memory":
        base = get_base_settings()
        if not base.is_development:
            logger.warning(
                "memory_token_store_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        store = MemoryTokenStore()
    else:
        store = FileTokenStore(settings.file_path)

    logger.info("token_store_created", extra={"backend": backend})
    return store


# ──────────────────────────────────────────────────────────────────────────────
# Provider Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_mercadopago_provider() -> MercadoPagoProvider:
    settings = get_mercadopago_settings()
    return MercadoPagoProvider(
        settings,
        get_base_settings(),
        create_http_client("mercadopago", settings.request_timeout_seconds),
    )


def create_mercadopago_oauth_client() -> MercadoPagoOAuthClient:
    settings = get_mercadopago_settings()
    return MercadoPagoOAuthClient(
        settings,
        create_http_client("mercadopago_oauth", settings.request_timeout_seconds),
    )


def create_pagbank_provider(
    provider_class: type[PagBankProvider] = PagBankProvider,
) -> PagBankProvider:
    """Cria uma das variantes PagBank (checkout, link de pagamento, duas etapas)."""
    settings = get_pagbank_settings()
    return provider_class(
        settings,
        get_base_settings(),
        create_http_client("pagbank", settings.request_timeout_seconds),
    )


def create_stripe_provider() -> StripeProvider:
    settings = get_stripe_settings()
    return StripeProvider(settings, get_base_settings())


def create_recaptcha_client() -> RecaptchaClient:
    settings = get_recaptcha_settings()
    return RecaptchaClient(
        settings,
        create_http_client("recaptcha", settings.request_timeout_seconds),
    )


# ──────────────────────────────────────────────────────────────────────────────
# Singletons (Depends)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_token_store() -> TokenStoreProtocol:
    return create_token_store()


@lru_cache(maxsize=1)
def get_event_log() -> MemoryPaymentEventLog:
    """Log em memória dos últimos eventos de pagamento (compartilhado)."""
    return MemoryPaymentEventLog()


@lru_cache(maxsize=1)
def get_token_refresher() -> OAuthTokenRefresher:
    """Refresher único por processo; o lock single-flight vive nele."""
    return OAuthTokenRefresher(get_token_store(), create_mercadopago_oauth_client())


def get_mercadopago_provider() -> MercadoPagoProvider:
    return create_mercadopago_provider()


def get_pagbank_provider() -> PagBankProvider:
    return create_pagbank_provider()


def get_pagbank_payment_link_provider() -> PagBankProvider:
    return create_pagbank_provider(PagBankPaymentLinkProvider)


def get_pagseguro_provider() -> PagBankProvider:
    return create_pagbank_provider(PagBankTwoStepProvider)


def get_stripe_provider() -> StripeProvider:
    return create_stripe_provider()


def get_recaptcha_client() -> RecaptchaClient:
    return create_recaptcha_client()
