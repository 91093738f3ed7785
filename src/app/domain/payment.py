"""Contratos trocados entre as etapas do pipeline de checkout.

validar → montar payload (PaymentPayload) → invocar (ProviderResponse)
→ normalizar (PaymentResult).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

ProviderName = Literal["mercadopago", "pagbank", "stripe"]


@dataclass(frozen=True, slots=True)
class PaymentPayload:
    """Corpo pronto para envio ao provedor.

    Segredos nunca entram em ``body``; trafegam apenas em headers.
    ``follow_up`` é a segunda etapa de fluxos pedido → cobrança.
    """

    provider: ProviderName
    body: dict[str, Any]
    idempotency_key: str
    follow_up: PaymentPayload | None = None


@dataclass(frozen=True, slots=True)
class ProviderResponse:
    """Resposta HTTP bruta do provedor.

    ``data`` é None quando o corpo não é um objeto JSON válido; ``text``
    preserva o corpo original para diagnóstico.
    """

    status_code: int
    text: str
    data: dict[str, Any] | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True, slots=True)
class PaymentResult:
    """Resultado normalizado devolvido ao cliente."""

    success: bool
    provider: ProviderName
    redirect_url: str | None = None
    provider_order_id: str | None = None
    sandbox_redirect_url: str | None = None
    qr_code: dict[str, Any] | None = None
    raw_provider_response: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class OrderStatus:
    """Status de um pedido consultado no provedor."""

    order_id: str
    status: str
    label: str


__all__ = [
    "OrderStatus",
    "PaymentPayload",
    "PaymentResult",
    "ProviderName",
    "ProviderResponse",
]
