"""Use case do checkout: montar payload → invocar provedor → normalizar.

A validação do corpo HTTP acontece antes (na rota), então uma requisição
inválida nunca chega até aqui e nenhuma chamada de rede é feita. Este é o
único ponto que sequencia as etapas do pipeline.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id, record_payment_outcome
from utils.errors import CheckoutError

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest
    from app.domain.payment import PaymentResult
    from app.protocols.event_log import PaymentEventLogProtocol
    from app.protocols.payment_provider import PaymentProviderProtocol

logger = logging.getLogger(__name__)


class CheckoutUseCase:
    """Executa o pipeline de pagamento para um provedor."""

    def __init__(
        self,
        *,
        provider: PaymentProviderProtocol,
        event_log: PaymentEventLogProtocol | None = None,
    ) -> None:
        self._provider = provider
        self._event_log = event_log

    @property
    def provider_name(self) -> str:
        return self._provider.name

    async def execute(self, booking: BookingRequest) -> PaymentResult:
        """Cria o pagamento e devolve o resultado normalizado.

        Raises:
            CheckoutError: Qualquer falha tipada do pipeline (upstream,
                forma da resposta, configuração).
        """
        provider = self._provider.name
        payload = self._provider.build_payload(booking)
        logger.info(
            "checkout_payload_built",
            extra={
                "provider": provider,
                "payment_method": booking.payment_method,
                "items": len(booking.line_items),
            },
        )

        try:
            response = await self._provider.invoke(payload)
            result = self._provider.normalize_response(response)
        except CheckoutError as exc:
            record_payment_outcome(
                provider, "failure", get_correlation_id(), error_type=type(exc).__name__
            )
            self._record(
                "error",
                {"context": f"{provider}_checkout", "error": {"message": exc.message}},
            )
            raise

        record_payment_outcome(provider, "success", get_correlation_id())
        self._record(
            "payment_event",
            {
                "event": "checkout_created",
                "data": {"provider": provider, "order_id": result.provider_order_id},
            },
        )
        logger.info(
            "checkout_created",
            extra={"provider": provider, "order_id": result.provider_order_id},
        )
        return result

    def _record(self, event_type: str, data: dict) -> None:
        if self._event_log is not None:
            self._event_log.record(event_type, data)
