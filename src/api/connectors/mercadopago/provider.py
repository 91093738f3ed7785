"""Provedor Mercado Pago — preferência do Checkout Pro."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.http_base import bearer_headers, ensure_success
from api.normalizers.mercadopago import normalize_preference_response
from api.payload_builders.mercadopago import build_preference_payload
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest
    from app.domain.payment import PaymentPayload, PaymentResult, ProviderResponse
    from app.protocols.http_client import PaymentHttpClientProtocol
    from config.settings import BaseSettings, MercadoPagoSettings

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "X-Idempotency-Key"


class MercadoPagoProvider:
    """Cria preferências em ``/checkout/preferences``.

    Args:
        settings: Credenciais e URLs do Mercado Pago
        base_settings: URL pública usada em back_urls/notification_url
        http_client: Cliente HTTP (timeout, sem retry)
    """

    name = "mercadopago"

    def __init__(
        self,
        settings: MercadoPagoSettings,
        base_settings: BaseSettings,
        http_client: PaymentHttpClientProtocol,
    ) -> None:
        self._settings = settings
        self._base = base_settings
        self._http = http_client

    def build_payload(self, booking: BookingRequest) -> PaymentPayload:
        return build_preference_payload(booking, self._base.api_base_url)

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse:
        if not self._settings.access_token:
            raise ConfigurationError(
                "Mercado Pago não configurado",
                details="MERCADOPAGO_ACCESS_TOKEN ausente",
            )
        response = await self._http.request(
            "POST",
            self._settings.preferences_url,
            headers=bearer_headers(
                self._settings.access_token, IDEMPOTENCY_HEADER, payload.idempotency_key
            ),
            json=payload.body,
        )
        return ensure_success(
            response,
            "Erro ao criar preferência de pagamento",
            error_key="message",
        )

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        return normalize_preference_response(response)
