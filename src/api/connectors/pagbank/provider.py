"""Provedor PagBank — API de Orders (PIX, cartão e fluxo em duas etapas).

Variantes:
- ``PagBankProvider``: pedido com pagamento embutido (checkout de aula)
- ``PagBankPaymentLinkProvider``: pedido que exige link de pagamento
- ``PagBankTwoStepProvider``: pedido e depois cobrança (PagSeguro)

Todas compartilham autenticação Bearer, ``x-idempotency-key`` e a URL
base escolhida por ``PAGBANK_ENV``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from api.connectors.http_base import bearer_headers, ensure_success
from api.normalizers.common import require_json
from api.normalizers.pagbank import (
    UNPARSEABLE_MESSAGE,
    normalize_charge_response,
    normalize_order_response,
    normalize_payment_link_response,
    normalize_status_response,
)
from api.payload_builders.pagbank import (
    build_charge_payload,
    build_order_payload,
    build_two_step_order_payload,
)
from app.domain.payment import ProviderResponse
from utils.errors import ConfigurationError, ResponseShapeError, ValidationError

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest
    from app.domain.payment import OrderStatus, PaymentPayload, PaymentResult
    from app.protocols.http_client import PaymentHttpClientProtocol
    from config.settings import BaseSettings, PagBankSettings

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "x-idempotency-key"


class PagBankProvider:
    """Pedido ``AULA_{ms}`` com cartão (charges) ou PIX (qr_codes)."""

    name = "pagbank"
    rejection_message = "Erro ao processar pagamento no PagBank"
    webhook_path = "/api/pagbank/webhook"

    def __init__(
        self,
        settings: PagBankSettings,
        base_settings: BaseSettings,
        http_client: PaymentHttpClientProtocol,
    ) -> None:
        self._settings = settings
        self._base = base_settings
        self._http = http_client

    @property
    def notification_url(self) -> str:
        return f"{self._base.api_base_url}{self.webhook_path}"

    def _require_token(self) -> str:
        if not self._settings.token:
            raise ConfigurationError("PagBank não configurado", details="PAGBANK_TOKEN ausente")
        return self._settings.token

    async def _send(
        self,
        method: str,
        url: str,
        payload: PaymentPayload | None = None,
    ) -> ProviderResponse:
        token = self._require_token()
        response = await self._http.request(
            method,
            url,
            headers=bearer_headers(
                token,
                IDEMPOTENCY_HEADER,
                payload.idempotency_key if payload is not None else None,
            ),
            json=payload.body if payload is not None else None,
        )
        # Corpo ilegível tem precedência sobre o status HTTP
        require_json(response, UNPARSEABLE_MESSAGE)
        return ensure_success(response, self.rejection_message, error_key="error_messages")

    def build_payload(self, booking: BookingRequest) -> PaymentPayload:
        return build_order_payload(booking, notification_url=self.notification_url)

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse:
        logger.info(
            "pagbank_order_request",
            extra={
                "environment": self._settings.environment,
                "reference_id": payload.body.get("reference_id"),
            },
        )
        return await self._send("POST", self._settings.orders_url, payload)

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        return normalize_order_response(response)

    async def fetch_status(self, order_id: str) -> OrderStatus:
        """Consulta ``GET /orders/{id}`` e devolve o status normalizado."""
        if not order_id:
            raise ValidationError("orderId é obrigatório", fields=["orderId"])
        response = await self._send("GET", self._settings.order_url(order_id))
        return normalize_status_response(response, order_id)


class PagBankPaymentLinkProvider(PagBankProvider):
    """Pedido simples que só é válido com link ``rel == "payment"``."""

    rejection_message = "Erro ao processar pagamento"

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        return normalize_payment_link_response(response)


class PagBankTwoStepProvider(PagBankProvider):
    """Cria o pedido ``ORDER_{ms}`` e em seguida a cobrança ``CHARGE_{ms}``."""

    rejection_message = "Erro ao criar ordem de pagamento"
    webhook_path = "/api/pagseguro/webhook"

    def build_payload(self, booking: BookingRequest) -> PaymentPayload:
        order = build_two_step_order_payload(booking, notification_url=self.notification_url)
        return dataclasses.replace(order, follow_up=build_charge_payload(booking))

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse:
        order_response = await self._send("POST", self._settings.orders_url, payload)
        order_data = order_response.data or {}
        order_id = order_data.get("id")
        if not order_id:
            raise ResponseShapeError(
                "Pedido criado sem identificador",
                details="Campo ausente: id",
                upstream_status=order_response.status_code,
            )
        logger.info("pagbank_order_created", extra={"order_id": order_id})

        if payload.follow_up is None:
            return order_response

        charge_response = await self._send(
            "POST", self._settings.charges_url(str(order_id)), payload.follow_up
        )
        return ProviderResponse(
            status_code=charge_response.status_code,
            text=charge_response.text,
            data={**(charge_response.data or {}), "order_id": str(order_id)},
        )

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        return normalize_charge_response(response)
