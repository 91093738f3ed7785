"""Settings do armazenamento do token OAuth do Mercado Pago.

O backend padrão é ``file`` (``mp_token.json``), compatível com o
formato gravado pelo fluxo de autorização.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

TokenStoreBackend = Literal["file", "memory", "redis", "firestore"]

_VALID_BACKENDS = ("file", "memory", "redis", "firestore")


@dataclass(frozen=True)
class TokenStoreSettings:
    """Configurações do token store.

    Attributes:
        backend: Backend de persistência do token
        file_path: Caminho do arquivo JSON (backend file)
        collection: Collection Firestore (backend firestore)
        redis_key: Chave Redis (backend redis)
    """

    backend: TokenStoreBackend = "file"
    file_path: str = "mp_token.json"
    collection: str = "oauth_tokens"
    redis_key: str = "dancing:oauth:mercadopago"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do token store.

        Args:
            base: BaseSettings para verificar ambiente e credenciais.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in _VALID_BACKENDS:
            errors.append(f"TOKEN_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("TOKEN_STORE_BACKEND=memory proibido em staging/production")

        if self.backend == "file" and not self.file_path:
            errors.append("MP_TOKEN_FILE não pode ser vazio")

        if self.backend == "redis" and not base.redis_url:
            errors.append("REDIS_URL obrigatório para TOKEN_STORE_BACKEND=redis")

        if self.backend == "firestore" and not self.collection:
            errors.append("TOKEN_STORE_COLLECTION não pode ser vazio")

        return errors


def _load_token_store_from_env() -> TokenStoreSettings:
    """Carrega TokenStoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("TOKEN_STORE_BACKEND", "file").lower()
    backend: TokenStoreBackend = (
        backend_str if backend_str in _VALID_BACKENDS else "file"
    )
    return TokenStoreSettings(
        backend=backend,
        file_path=os.getenv("MP_TOKEN_FILE", "mp_token.json"),
        collection=os.getenv("TOKEN_STORE_COLLECTION", "oauth_tokens"),
        redis_key=os.getenv("TOKEN_STORE_REDIS_KEY", "dancing:oauth:mercadopago"),
    )


@lru_cache(maxsize=1)
def get_token_store_settings() -> TokenStoreSettings:
    """Retorna instância cacheada de TokenStoreSettings."""
    return _load_token_store_from_env()
