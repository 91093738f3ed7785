"""Endpoints PagSeguro: pedido em duas etapas e webhook com consulta de status.

Endpoints:
- POST /api/pagseguro/create-order
- POST /api/pagseguro/webhook
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from api.routes.common import log_notification, read_json_body
from api.validators.checkout import validate_order_request
from app.bootstrap.dependencies import get_event_log, get_pagseguro_provider
from app.use_cases.checkout import CheckoutUseCase
from utils.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-order")
async def create_order(
    request: Request,
    provider=Depends(get_pagseguro_provider),
    event_log=Depends(get_event_log),
) -> dict[str, Any]:
    """Cria o pedido e em seguida a cobrança, devolvendo a URL de pagamento."""
    booking = validate_order_request(await read_json_body(request))
    result = await CheckoutUseCase(provider=provider, event_log=event_log).execute(booking)
    return {
        "success": True,
        "order_id": result.provider_order_id,
        "payment_url": result.redirect_url,
    }


@router.post("/webhook")
async def pagseguro_webhook(
    request: Request,
    provider=Depends(get_pagseguro_provider),
    event_log=Depends(get_event_log),
) -> PlainTextResponse:
    """Consulta o pedido notificado e registra o status traduzido."""
    body = await read_json_body(request)
    log_notification("pagseguro", request, body)
    payload = body if isinstance(body, dict) else {}
    notification_code = payload.get("notificationCode")
    if not notification_code:
        raise ValidationError(
            "Notificação inválida",
            details="notificationCode é obrigatório",
            fields=["notificationCode"],
        )

    status = await provider.fetch_status(str(notification_code))
    logger.info(
        "pagseguro_order_status",
        extra={"order_id": status.order_id, "status": status.status, "label": status.label},
    )
    event_log.record(
        "webhook",
        {
            "source": "pagseguro",
            "notification_type": payload.get("notificationType"),
            "order_id": status.order_id,
            "status": status.status,
            "label": status.label,
        },
    )
    return PlainTextResponse("OK")
