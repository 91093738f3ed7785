"""Normalização da preferência criada no Mercado Pago."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.normalizers.common import MISSING_PAYMENT_URL, missing_field, optional_str, require_json
from app.domain.payment import PaymentResult

if TYPE_CHECKING:
    from app.domain.payment import ProviderResponse


def normalize_preference_response(response: ProviderResponse) -> PaymentResult:
    """``init_point``/``sandbox_init_point`` + ``id`` → PaymentResult.

    Raises:
        UpstreamUnparseableError: Corpo não é JSON.
        ResponseShapeError: Nenhum init_point na resposta.
    """
    data = require_json(response, "Erro ao processar resposta do Mercado Pago")
    init_point = optional_str(data.get("init_point"))
    sandbox_init_point = optional_str(data.get("sandbox_init_point"))
    redirect_url = init_point or sandbox_init_point
    if redirect_url is None:
        raise missing_field(MISSING_PAYMENT_URL, data, "init_point")

    return PaymentResult(
        success=True,
        provider="mercadopago",
        redirect_url=redirect_url,
        sandbox_redirect_url=sandbox_init_point,
        provider_order_id=optional_str(data.get("id")),
        raw_provider_response=data,
    )
