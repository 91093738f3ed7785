"""Protocolo de persistência do token OAuth do Mercado Pago."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.oauth_token import OAuthToken


class TokenStoreProtocol(ABC):
    """Contrato mínimo assíncrono para get/set do token.

    Implementações garantem exclusão mútua entre leituras e escritas
    concorrentes (lock em processo ou lock distribuído).
    """

    @abstractmethod
    async def get(self) -> OAuthToken | None: ...

    @abstractmethod
    async def set(self, token: OAuthToken) -> None: ...
