"""Endpoints Stripe: sessão de checkout e webhook assinado.

Endpoints:
- POST /api/stripe/create-session
- POST /api/stripe/webhook

O webhook lê o corpo cru para verificar ``Stripe-Signature``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from api.connectors.stripe import parse_stripe_event
from api.routes.common import read_json_body
from api.validators.checkout import validate_order_request
from app.bootstrap.dependencies import get_event_log, get_stripe_provider
from app.use_cases.checkout import CheckoutUseCase
from config.settings import get_stripe_settings

logger = logging.getLogger(__name__)

router = APIRouter()

HANDLED_EVENTS = frozenset(
    {
        "checkout.session.completed",
        "payment_intent.succeeded",
        "payment_intent.payment_failed",
    }
)


@router.post("/create-session")
async def create_session(
    request: Request,
    provider=Depends(get_stripe_provider),
    event_log=Depends(get_event_log),
) -> dict[str, Any]:
    """Cria a Checkout Session e devolve a URL hospedada."""
    booking = validate_order_request(await read_json_body(request))
    result = await CheckoutUseCase(provider=provider, event_log=event_log).execute(booking)
    return {"success": True, "url": result.redirect_url, "id": result.provider_order_id}


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    event_log=Depends(get_event_log),
) -> dict[str, bool]:
    """Verifica a assinatura e registra o evento (400 se inválida)."""
    settings = get_stripe_settings()
    event = parse_stripe_event(
        await request.body(),
        request.headers.get("stripe-signature"),
        settings.webhook_secret,
        settings.webhook_tolerance_seconds,
    )

    event_type = event.get("type")
    data = event.get("data") if isinstance(event.get("data"), dict) else {}
    data_object = data.get("object") if isinstance(data.get("object"), dict) else {}
    if event_type in HANDLED_EVENTS:
        logger.info(
            "stripe_event_received",
            extra={"event_type": event_type, "object_id": data_object.get("id")},
        )
    else:
        logger.info("stripe_event_ignored", extra={"event_type": event_type})

    event_log.record(
        "webhook",
        {
            "source": "stripe",
            "event_id": event.get("id"),
            "event_type": event_type,
            "object_id": data_object.get("id"),
        },
    )
    return {"received": True}
