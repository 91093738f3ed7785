"""Exceções do fluxo de checkout e de infraestrutura.

Toda falha que atravessa a borda HTTP é uma ``CheckoutError`` e carrega
o status HTTP e o texto ``details`` usados na serialização ``{error, details}``.
"""

from __future__ import annotations

from typing import Any


class CheckoutError(Exception):
    """Base para falhas do pipeline validar → montar → invocar → normalizar."""

    status_code: int = 500
    is_retryable: bool = False

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Forma uniforme de erro devolvida ao cliente."""
        return {"error": self.message, "details": self.details}


class ValidationError(CheckoutError):
    """Entrada inválida; o cliente precisa corrigir o corpo da requisição."""

    status_code = 400

    def __init__(
        self,
        message: str,
        details: Any = None,
        fields: list[str] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.fields = fields or []


class ReauthorizationRequiredError(CheckoutError):
    """Token OAuth ausente ou sem refresh_token; exige nova autorização."""

    status_code = 400


class ConfigurationError(CheckoutError):
    """Credencial ou URL obrigatória não configurada."""

    status_code = 500


class UpstreamError(CheckoutError):
    """Base para falhas vindas do provedor de pagamento."""

    def __init__(
        self,
        message: str,
        details: Any = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message, details)
        self.upstream_status = upstream_status


class UpstreamTimeoutError(UpstreamError):
    """Provedor não respondeu dentro do timeout."""

    status_code = 504
    is_retryable = True


class UpstreamUnavailableError(UpstreamError):
    """Falha de conexão com o provedor."""

    status_code = 502
    is_retryable = True


class UpstreamRejectedError(UpstreamError):
    """Provedor respondeu com status não-2xx."""

    status_code = 500


class ResponseShapeError(UpstreamError):
    """Resposta 2xx sem o campo esperado (drift de integração)."""

    status_code = 500


class UpstreamUnparseableError(ResponseShapeError):
    """Corpo da resposta do provedor não é JSON válido."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class TokenStoreError(InfrastructureError):
    """Falha ao ler ou gravar o token OAuth persistido."""
