"""Protocolo do cliente OAuth do provedor (troca e renovação de token)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.oauth_token import OAuthToken


class OAuthClientProtocol(Protocol):
    """Contrato mínimo usado pelo OAuthTokenRefresher."""

    def authorization_url(self) -> str: ...

    async def exchange_code(self, code: str) -> OAuthToken: ...

    async def refresh(self, refresh_token: str) -> OAuthToken: ...
