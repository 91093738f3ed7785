"""Cliente OAuth do Mercado Pago (authorization_code e refresh_token).

Uso:
    client = MercadoPagoOAuthClient(settings, http_client)
    url = client.authorization_url()
    token = await client.exchange_code(code)
    token = await client.refresh(token.refresh_token)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from api.connectors.http_base import ensure_success
from api.normalizers.common import require_json
from app.domain.oauth_token import OAuthToken
from utils.errors import ConfigurationError, ResponseShapeError

if TYPE_CHECKING:
    from app.protocols.http_client import PaymentHttpClientProtocol
    from config.settings import MercadoPagoSettings

logger = logging.getLogger(__name__)


class MercadoPagoOAuthClient:
    """Troca e renovação de tokens em ``/oauth/token``."""

    def __init__(
        self,
        settings: MercadoPagoSettings,
        http_client: PaymentHttpClientProtocol,
    ) -> None:
        self._settings = settings
        self._http = http_client

    def authorization_url(self) -> str:
        """URL da tela de autorização (redirect 302)."""
        query = urlencode(
            {
                "client_id": self._settings.client_id,
                "response_type": "code",
                "platform_id": "mp",
                "redirect_uri": self._settings.redirect_uri,
            }
        )
        return f"{self._settings.authorization_url}?{query}"

    async def exchange_code(self, code: str) -> OAuthToken:
        """Troca o ``code`` do callback por um token."""
        return await self._request_token(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._settings.redirect_uri,
            },
            error_message="Erro ao obter token de acesso",
        )

    async def refresh(self, refresh_token: str) -> OAuthToken:
        """Renova o token a partir do ``refresh_token``."""
        return await self._request_token(
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            error_message="Erro ao renovar token",
        )

    async def _request_token(self, grant: dict[str, Any], error_message: str) -> OAuthToken:
        if not self._settings.client_id or not self._settings.client_secret:
            raise ConfigurationError(
                "OAuth do Mercado Pago não configurado",
                details="MERCADOPAGO_CLIENT_ID e MERCADOPAGO_CLIENT_SECRET são obrigatórios",
            )

        response = await self._http.request(
            "POST",
            self._settings.oauth_token_url,
            headers={"Accept": "application/json"},
            json={
                "client_id": self._settings.client_id,
                "client_secret": self._settings.client_secret,
                **grant,
            },
        )
        ensure_success(response, error_message, error_key="message")
        data = require_json(response, error_message)
        if not data.get("access_token"):
            raise ResponseShapeError(error_message, details="Campo ausente: access_token")

        token = OAuthToken.from_provider_response(data)
        logger.info(
            "oauth_token_issued",
            extra={
                "grant_type": grant["grant_type"],
                "user_id": token.user_id,
                "expires_in": token.expires_in,
            },
        )
        return token
