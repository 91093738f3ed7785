"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.payment import ProviderResponse


class PaymentHttpClientProtocol(Protocol):
    """Contrato mínimo para o cliente HTTP dos provedores de pagamento."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> ProviderResponse: ...
