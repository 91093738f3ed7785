"""Provedor Stripe: Checkout Sessions via SDK oficial (``stripe``)."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

import stripe

from api.normalizers.stripe import normalize_checkout_session_response
from api.payload_builders.stripe import build_checkout_session_payload
from app.domain.payment import ProviderResponse
from app.observability import record_latency
from config.logging.redaction import redact
from utils.errors import (
    ConfigurationError,
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest
    from app.domain.payment import PaymentPayload, PaymentResult
    from config.settings import BaseSettings, StripeSettings

logger = logging.getLogger(__name__)

SESSION_CREATE_OPERATION = "POST /v1/checkout/sessions"


def _error_details(exc: stripe.StripeError) -> Any:
    body = exc.json_body if isinstance(exc.json_body, dict) else {}
    return body.get("error") or exc.user_message or str(exc)


class StripeProvider:
    """Cria sessões com ``stripe.checkout.Session.create``.

    A chamada do SDK é síncrona e roda em thread (``asyncio.to_thread``),
    limitada por ``request_timeout_seconds``. success_url/cancel_url padrão
    ficam sob a URL pública da API (``/admin/stripe/success`` e
    ``/admin/stripe/cancel``).
    """

    name = "stripe"

    def __init__(
        self,
        settings: StripeSettings,
        base_settings: BaseSettings,
        sessions: Any = None,
    ) -> None:
        self._settings = settings
        self._base = base_settings
        self._sessions = sessions or stripe.checkout.Session

    @property
    def success_url(self) -> str:
        return self._settings.success_url or f"{self._base.api_base_url}/admin/stripe/success"

    @property
    def cancel_url(self) -> str:
        return self._settings.cancel_url or f"{self._base.api_base_url}/admin/stripe/cancel"

    def build_payload(self, booking: BookingRequest) -> PaymentPayload:
        return build_checkout_session_payload(booking, self.success_url, self.cancel_url)

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse:
        """Cria a sessão e devolve ``{id, url}`` como ProviderResponse.

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY ausente.
            UpstreamTimeoutError: SDK não respondeu dentro do timeout.
            UpstreamUnavailableError: Falha de conexão com a API do Stripe.
            UpstreamRejectedError: Stripe recusou a criação da sessão.
        """
        if not self._settings.secret_key:
            raise ConfigurationError("Stripe não configurado", details="STRIPE_SECRET_KEY ausente")

        start = time.perf_counter()
        try:
            session = await asyncio.wait_for(
                asyncio.to_thread(
                    self._sessions.create,
                    api_key=self._settings.secret_key,
                    idempotency_key=payload.idempotency_key,
                    **payload.body,
                ),
                timeout=self._settings.request_timeout_seconds,
            )
        except TimeoutError as exc:
            logger.warning("provider_timeout", extra={"component": self.name})
            raise UpstreamTimeoutError(
                "Tempo esgotado ao contatar o provedor de pagamento",
                details="timeout",
            ) from exc
        except stripe.APIConnectionError as exc:
            logger.warning("provider_unavailable", extra={"component": self.name})
            raise UpstreamUnavailableError(
                "Provedor de pagamento indisponível",
                details=exc.user_message or exc.__class__.__name__,
            ) from exc
        except stripe.StripeError as exc:
            details = _error_details(exc)
            logger.warning(
                "provider_rejected",
                extra={"upstream_status": exc.http_status, "details": redact(details)},
            )
            raise UpstreamRejectedError(
                "Erro ao criar sessão de pagamento",
                details=details,
                upstream_status=exc.http_status,
            ) from exc
        finally:
            record_latency(self.name, SESSION_CREATE_OPERATION, (time.perf_counter() - start) * 1000)

        logger.info("provider_response", extra={"component": self.name, "session_id": session.id})
        return ProviderResponse(
            status_code=200,
            text="",
            data={"id": session.id, "url": session.url},
        )

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        return normalize_checkout_session_response(response)
