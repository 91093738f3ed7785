"""Clientes de infraestrutura do token store (Redis e Firestore).

Criados sob demanda, apenas quando ``TOKEN_STORE_BACKEND`` exige, e
reaproveitados por todo o processo. ``close_clients`` encerra o que foi
aberto no shutdown.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

REDIS_SOCKET_TIMEOUT_SECONDS = 5.0


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cliente Redis assíncrono compartilhado.

    Raises:
        ValueError: Se REDIS_URL não configurado.
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        raise ValueError("REDIS_URL não configurado")

    client = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        health_check_interval=30,
    )
    logger.info(
        "token_store_redis_client_created",
        extra={"host": client.connection_pool.connection_kwargs.get("host", "unknown")},
    )
    return client


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cliente Firestore compartilhado (projeto de GCP_PROJECT ou ADC)."""
    from google.cloud import firestore

    project_id = get_base_settings().gcp_project or None
    client = firestore.Client(project=project_id)
    logger.info("token_store_firestore_client_created", extra={"project": project_id})
    return client


async def close_clients() -> None:
    """Fecha os clientes criados neste processo e limpa o cache."""
    if create_async_redis_client.cache_info().currsize:
        await create_async_redis_client().aclose()
        create_async_redis_client.cache_clear()
        logger.info("token_store_redis_client_closed")

    if create_firestore_client.cache_info().currsize:
        create_firestore_client().close()
        create_firestore_client.cache_clear()
        logger.info("token_store_firestore_client_closed")
