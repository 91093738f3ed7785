"""Renovação do token OAuth do Mercado Pago com single-flight.

Estados do token armazenado: {válido, expirado-ou-ausente}. Sem token ou
sem ``refresh_token`` a única saída é reautorizar, e nenhuma chamada de
rede é feita. Renovações concorrentes são serializadas por um
``asyncio.Lock``: quem chega enquanto outra renovação está em curso
espera e recebe o token recém-gravado.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from app.observability import record_latency
from utils.errors import ReauthorizationRequiredError

if TYPE_CHECKING:
    from app.domain.oauth_token import OAuthToken
    from app.protocols.oauth_client import OAuthClientProtocol
    from app.protocols.token_store import TokenStoreProtocol

logger = logging.getLogger(__name__)


class OAuthTokenRefresher:
    """Coordena token store e cliente OAuth.

    Args:
        store: Persistência do token (arquivo, memória, Redis, Firestore)
        oauth_client: Cliente que fala com ``/oauth/token``
    """

    def __init__(self, store: TokenStoreProtocol, oauth_client: OAuthClientProtocol) -> None:
        self._store = store
        self._client = oauth_client
        self._lock = asyncio.Lock()
        self._generation = 0

    def authorization_url(self) -> str:
        return self._client.authorization_url()

    async def authorize(self, code: str) -> OAuthToken:
        """Troca o ``code`` do callback e persiste o token."""
        token = await self._client.exchange_code(code)
        async with self._lock:
            await self._store.set(token)
            self._generation += 1
        logger.info("oauth_authorized", extra={"user_id": token.user_id})
        return token

    async def refresh(self) -> OAuthToken:
        """Renova e sobrescreve o token armazenado.

        Raises:
            ReauthorizationRequiredError: Token ausente ou sem refresh_token.
        """
        observed = self._generation
        async with self._lock:
            if self._generation != observed:
                # Outra corrotina renovou enquanto esperávamos o lock
                current = await self._store.get()
                if current is not None:
                    logger.info("oauth_refresh_coalesced")
                    return current

            token = await self._store.get()
            if token is None or not token.can_refresh:
                logger.warning(
                    "oauth_reauthorization_required",
                    extra={"token_present": token is not None},
                )
                raise ReauthorizationRequiredError(
                    "Token de atualização não encontrado",
                    details="É necessário realizar uma nova autorização",
                )

            start = time.perf_counter()
            refreshed = await self._client.refresh(token.refresh_token)
            record_latency("mercadopago_oauth", "refresh", (time.perf_counter() - start) * 1000)
            if not refreshed.refresh_token:
                refreshed = refreshed.model_copy(update={"refresh_token": token.refresh_token})
            await self._store.set(refreshed)
            self._generation += 1

        logger.info("oauth_token_refreshed", extra={"user_id": refreshed.user_id})
        return refreshed

    async def get_valid_token(self) -> OAuthToken:
        """Token atual, renovado antes se já expirou.

        Raises:
            ReauthorizationRequiredError: Nenhum token armazenado.
        """
        token = await self._store.get()
        if token is None:
            raise ReauthorizationRequiredError(
                "Token de acesso não encontrado",
                details="É necessário realizar uma nova autorização",
            )
        if token.is_expired():
            return await self.refresh()
        return token
