"""Settings específicas do PagBank (antigo PagSeguro).

O ambiente (sandbox/produção) define a URL base de todas as chamadas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

PagBankEnvironment = Literal["sandbox", "production"]

PAGBANK_PRODUCTION_URL: str = "https://api.pagseguro.com"
PAGBANK_SANDBOX_URL: str = "https://sandbox.api.pagseguro.com"


@dataclass(frozen=True)
class PagBankSettings:
    """Configurações do PagBank.

    Attributes:
        token: Bearer token da conta PagBank
        environment: sandbox|production (PAGBANK_ENV)
        request_timeout_seconds: Timeout para requisições HTTP
    """

    token: str = ""
    environment: PagBankEnvironment = "sandbox"
    request_timeout_seconds: float = 15.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_base_url(self) -> str:
        """URL base conforme PAGBANK_ENV."""
        return PAGBANK_PRODUCTION_URL if self.is_production else PAGBANK_SANDBOX_URL

    @property
    def orders_url(self) -> str:
        """Endpoint de pedidos (orders)."""
        return f"{self.api_base_url}/orders"

    def order_url(self, order_id: str) -> str:
        """Endpoint de consulta de um pedido."""
        return f"{self.orders_url}/{order_id}"

    def charges_url(self, order_id: str) -> str:
        """Endpoint de cobranças de um pedido (fluxo em duas etapas)."""
        return f"{self.orders_url}/{order_id}/charges"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do PagBank.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.token:
            errors.append("PAGBANK_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("PAGBANK_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> PagBankSettings:
    """Carrega PagBankSettings a partir de variáveis de ambiente."""
    environment: PagBankEnvironment = (
        "production"
        if os.getenv("PAGBANK_ENV", "").lower() == "production"
        else "sandbox"
    )
    return PagBankSettings(
        token=os.getenv("PAGBANK_TOKEN", os.getenv("PAGSEGURO_TOKEN", "")),
        environment=environment,
        request_timeout_seconds=float(
            os.getenv(
                "PAGBANK_REQUEST_TIMEOUT_SECONDS",
                os.getenv("PAYMENT_REQUEST_TIMEOUT_SECONDS", "15"),
            )
        ),
    )


@lru_cache(maxsize=1)
def get_pagbank_settings() -> PagBankSettings:
    """Retorna instância cacheada de PagBankSettings."""
    return _load_from_env()
