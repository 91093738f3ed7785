"""Redis Token Store — token OAuth compartilhado entre instâncias.

Escritas são serializadas por um lock distribuído do Redis, de modo que
duas instâncias renovando ao mesmo tempo não intercalem gravações.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from app.domain.oauth_token import OAuthToken
from app.protocols.token_store import TokenStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo do lock de escrita
LOCK_SUFFIX = ":lock"


class RedisTokenStore(TokenStoreProtocol):
    """Token store usando Redis (JSON sob uma chave com namespace).

    Args:
        redis_client: Cliente Redis assíncrono
        key: Chave do token (ex: dancing:oauth:mercadopago)
        lock_timeout_seconds: Expiração do lock de escrita
    """

    def __init__(
        self,
        redis_client: AsyncRedis,
        key: str = "dancing:oauth:mercadopago",
        lock_timeout_seconds: float = 10.0,
    ) -> None:
        self._redis = redis_client
        self._key = key
        self._lock_timeout = lock_timeout_seconds

    async def get(self) -> OAuthToken | None:
        try:
            raw = await self._redis.get(self._key)
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler token no Redis") from exc

        if raw is None:
            return None
        try:
            return OAuthToken.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning("token_load_error", extra={"key": self._key, "error": str(e)})
            return None

    async def set(self, token: OAuthToken) -> None:
        data = json.dumps(token.to_storage())
        try:
            async with self._redis.lock(
                f"{self._key}{LOCK_SUFFIX}",
                timeout=self._lock_timeout,
                blocking_timeout=self._lock_timeout,
            ):
                await self._redis.set(self._key, data)
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar token no Redis") from exc
        logger.info("oauth_token_saved", extra={"backend": "redis", "key": self._key})
