"""Settings base do serviço de pagamentos Dancing Patinação.

Configurações comuns a todos os provedores e rotas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_PORT = 3001
DEFAULT_PUBLIC_API_URL = "http://localhost:3001"


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs e tracing
        debug: Modo debug ativo
        port: Porta HTTP do servidor
        public_api_url: URL pública da API (back_urls, notification_urls)
        allowed_origins: Origens liberadas no CORS ("*" = todas)
        gcp_project: ID do projeto GCP (Firestore)
        redis_url: URL de conexão Redis
    """

    # Ambiente
    environment: Environment = "development"
    service_name: str = "dancing-pagamentos"
    debug: bool = False
    port: int = DEFAULT_PORT

    # URLs públicas
    public_api_url: str = DEFAULT_PUBLIC_API_URL
    allowed_origins: tuple[str, ...] = field(default=("*",))

    # GCP
    gcp_project: str = ""

    # Redis
    redis_url: str = ""

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment == "staging"

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment == "development"

    @property
    def api_base_url(self) -> str:
        """URL pública sem barra final."""
        return self.public_api_url.rstrip("/")

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")

        if not self.public_api_url.startswith(("http://", "https://")):
            errors.append("NEXT_PUBLIC_API_URL deve começar com http:// ou https://")

        if not self.is_development and self.public_api_url == DEFAULT_PUBLIC_API_URL:
            errors.append("NEXT_PUBLIC_API_URL deve ser configurada fora de development")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(
            os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development"))
        ),
        service_name=os.getenv("SERVICE_NAME", "dancing-pagamentos"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        public_api_url=os.getenv("NEXT_PUBLIC_API_URL", DEFAULT_PUBLIC_API_URL),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS", "*")),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
