"""Normalização da Checkout Session do Stripe."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.normalizers.common import MISSING_PAYMENT_URL, missing_field, optional_str, require_json
from app.domain.payment import PaymentResult

if TYPE_CHECKING:
    from app.domain.payment import ProviderResponse


def normalize_checkout_session_response(response: ProviderResponse) -> PaymentResult:
    """``url`` + ``id`` da sessão → PaymentResult."""
    data = require_json(response, "Erro ao processar resposta do Stripe")
    url = optional_str(data.get("url"))
    if url is None:
        raise missing_field(MISSING_PAYMENT_URL, data, "url")
    return PaymentResult(
        success=True,
        provider="stripe",
        redirect_url=url,
        provider_order_id=optional_str(data.get("id")),
        raw_provider_response=data,
    )
