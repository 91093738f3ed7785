"""Endpoints PagBank: checkout do agendamento, pagamento simples, status e webhook.

Endpoints:
- POST /api/pagbank/checkout
- POST /api/pagbank/create-payment
- GET  /api/pagbank/payment-status?orderId=
- POST /api/pagbank/webhook

O checkout valida o reCAPTCHA antes de montar o pedido; uma verificação
recusada encerra a requisição com 400 sem chamar o PagBank.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from api.routes.common import log_notification, read_json_body
from api.validators.checkout import (
    validate_agendamento_checkout,
    validate_payment_status_query,
    validate_simple_payment,
)
from app.bootstrap.dependencies import (
    get_event_log,
    get_pagbank_payment_link_provider,
    get_pagbank_provider,
    get_recaptcha_client,
)
from app.use_cases.checkout import CheckoutUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/checkout")
async def pagbank_checkout(
    request: Request,
    provider=Depends(get_pagbank_provider),
    recaptcha=Depends(get_recaptcha_client),
    event_log=Depends(get_event_log),
) -> dict[str, Any]:
    """Cria o pedido do agendamento (PIX ou cartão)."""
    checkout = validate_agendamento_checkout(await read_json_body(request))
    await recaptcha.verify(checkout.recaptcha_token)

    result = await CheckoutUseCase(provider=provider, event_log=event_log).execute(
        checkout.booking
    )
    return {
        "success": True,
        "order_id": result.provider_order_id,
        "payment_url": result.redirect_url,
        "qr_code": result.qr_code,
        "payment_response": result.raw_provider_response,
        "links": result.raw_provider_response.get("links", []),
    }


@router.post("/create-payment")
async def create_payment(
    request: Request,
    provider=Depends(get_pagbank_payment_link_provider),
    event_log=Depends(get_event_log),
) -> dict[str, Any]:
    """Pedido simples ``{nome, email, valor}`` com link de pagamento."""
    booking = validate_simple_payment(await read_json_body(request))
    result = await CheckoutUseCase(provider=provider, event_log=event_log).execute(booking)
    return {
        "success": True,
        "order_id": result.provider_order_id,
        "payment_url": result.redirect_url,
        "url": result.redirect_url,
    }


@router.get("/payment-status")
async def payment_status(
    orderId: str | None = None,  # noqa: N803
    provider=Depends(get_pagbank_provider),
) -> dict[str, Any]:
    """Consulta o status de um pedido no PagBank."""
    order_id = validate_payment_status_query(orderId)
    status = await provider.fetch_status(order_id)
    return {"success": True, "status": status.status}


@router.post("/webhook")
async def pagbank_webhook(
    request: Request,
    event_log=Depends(get_event_log),
) -> dict[str, bool]:
    """Registra a notificação do PagBank; nenhum agendamento é atualizado."""
    body = await read_json_body(request)
    log_notification("pagbank", request, body)
    payload = body if isinstance(body, dict) else {}
    event_log.record(
        "webhook",
        {
            "source": "pagbank",
            "resource_id": payload.get("id"),
            "reference_id": payload.get("reference_id"),
        },
    )
    return {"received": True}
