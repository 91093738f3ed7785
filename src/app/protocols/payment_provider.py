"""Capacidade comum aos provedores de pagamento.

Cada variante (Mercado Pago, PagBank, Stripe) implementa as três etapas
do pipeline; a ordem de execução é responsabilidade do CheckoutUseCase.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest
    from app.domain.payment import (
        PaymentPayload,
        PaymentResult,
        ProviderName,
        ProviderResponse,
    )


class PaymentProviderProtocol(Protocol):
    """Contrato build_payload → invoke → normalize_response."""

    name: ProviderName

    def build_payload(self, booking: BookingRequest) -> PaymentPayload: ...

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse: ...

    def normalize_response(self, response: ProviderResponse) -> PaymentResult: ...
