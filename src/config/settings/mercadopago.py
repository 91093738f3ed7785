"""Settings específicas do Mercado Pago.

Credenciais da aplicação (checkout Pro e OAuth) e URLs da API.
Cada provedor tem seu próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

MERCADOPAGO_API_BASE_URL: str = "https://api.mercadopago.com"
MERCADOPAGO_AUTH_BASE_URL: str = "https://auth.mercadopago.com.br"
DEFAULT_REDIRECT_URI: str = (
    "https://dancing-webapp.com.br/api/mercadopago/oauth/callback"
)
STATEMENT_DESCRIPTOR: str = "Dancing Patinação"


@dataclass(frozen=True)
class MercadoPagoSettings:
    """Configurações do Mercado Pago.

    Attributes:
        access_token: Token da aplicação para criar preferências
        client_id: ID da aplicação (OAuth)
        client_secret: Secret da aplicação (OAuth)
        redirect_uri: URL de callback registrada no painel
        api_base_url: URL base da API REST
        auth_base_url: URL base da tela de autorização
        request_timeout_seconds: Timeout para requisições HTTP
    """

    # Credenciais
    access_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = DEFAULT_REDIRECT_URI

    # API
    api_base_url: str = MERCADOPAGO_API_BASE_URL
    auth_base_url: str = MERCADOPAGO_AUTH_BASE_URL

    # Timeouts
    request_timeout_seconds: float = 15.0

    @property
    def preferences_url(self) -> str:
        """Endpoint de criação de preferências do checkout."""
        return f"{self.api_base_url}/checkout/preferences"

    @property
    def oauth_token_url(self) -> str:
        """Endpoint de troca/renovação de token OAuth."""
        return f"{self.api_base_url}/oauth/token"

    @property
    def authorization_url(self) -> str:
        """Tela de autorização do vendedor."""
        return f"{self.auth_base_url}/authorization"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Mercado Pago.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("MERCADOPAGO_ACCESS_TOKEN não configurado")

        if not self.client_id:
            errors.append("MERCADOPAGO_CLIENT_ID não configurado")

        if not self.client_secret:
            errors.append("MERCADOPAGO_CLIENT_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("MERCADOPAGO_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> MercadoPagoSettings:
    """Carrega MercadoPagoSettings a partir de variáveis de ambiente."""
    return MercadoPagoSettings(
        access_token=os.getenv("MERCADOPAGO_ACCESS_TOKEN", ""),
        client_id=os.getenv("MERCADOPAGO_CLIENT_ID", ""),
        client_secret=os.getenv("MERCADOPAGO_CLIENT_SECRET", ""),
        redirect_uri=os.getenv("MERCADOPAGO_REDIRECT_URI", DEFAULT_REDIRECT_URI),
        api_base_url=os.getenv("MERCADOPAGO_API_BASE_URL", MERCADOPAGO_API_BASE_URL),
        auth_base_url=os.getenv(
            "MERCADOPAGO_AUTH_BASE_URL", MERCADOPAGO_AUTH_BASE_URL
        ),
        request_timeout_seconds=float(
            os.getenv(
                "MERCADOPAGO_REQUEST_TIMEOUT_SECONDS",
                os.getenv("PAYMENT_REQUEST_TIMEOUT_SECONDS", "15"),
            )
        ),
    )


@lru_cache(maxsize=1)
def get_mercadopago_settings() -> MercadoPagoSettings:
    """Retorna instância cacheada de MercadoPagoSettings."""
    return _load_from_env()
