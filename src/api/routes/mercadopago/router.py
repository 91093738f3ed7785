"""Endpoints Mercado Pago: preferência, OAuth, webhook e logs.

Endpoints:
- POST /api/mercadopago/create-preference
- GET  /api/mercadopago/oauth
- GET  /api/mercadopago/oauth/callback
- POST /api/mercadopago/oauth/refresh
- POST /api/mercadopago/webhook
- GET  /api/mercadopago/logs
"""

from __future__ import annotations

import html
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from api.routes.common import log_notification, read_json_body
from api.validators.checkout import validate_preference_request
from app.bootstrap.dependencies import (
    get_event_log,
    get_mercadopago_provider,
    get_token_refresher,
)
from app.use_cases.checkout import CheckoutUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

AUTHORIZATION_SUCCESS_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>Autorização Concluída</title>
    <style>
      body { font-family: Arial, sans-serif; display: flex; justify-content: center;
             align-items: center; height: 100vh; margin: 0; background-color: #f5f5f5; }
      .container { text-align: center; padding: 20px; background: white;
                   border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
      .success-icon { color: #4CAF50; font-size: 48px; margin-bottom: 16px; }
    </style>
  </head>
  <body>
    <div class="container">
      <div class="success-icon">✓</div>
      <h1>Autorização Concluída com Sucesso!</h1>
      <p>Você pode fechar esta janela e voltar para a aplicação.</p>
    </div>
  </body>
</html>
"""


@router.post("/create-preference")
async def create_preference(
    request: Request,
    provider=Depends(get_mercadopago_provider),
    event_log=Depends(get_event_log),
) -> dict[str, Any]:
    """Cria preferência do Checkout Pro e devolve os links de pagamento."""
    booking = validate_preference_request(await read_json_body(request))
    result = await CheckoutUseCase(provider=provider, event_log=event_log).execute(booking)
    event_log.record(
        "redirect",
        {"url": result.redirect_url, "preference_id": result.provider_order_id},
    )
    return {
        "success": True,
        "init_point": result.redirect_url,
        "sandbox_init_point": result.sandbox_redirect_url,
        "preferenceId": result.provider_order_id,
        "id": result.provider_order_id,
    }


@router.get("/oauth")
async def start_oauth(refresher=Depends(get_token_refresher)) -> RedirectResponse:
    """Redireciona (302) para a tela de autorização do Mercado Pago."""
    return RedirectResponse(refresher.authorization_url(), status_code=302)


@router.get("/oauth/callback", response_model=None)
async def oauth_callback(
    code: str | None = None,
    error: str | None = None,
    refresher=Depends(get_token_refresher),
) -> HTMLResponse | JSONResponse:
    """Troca o ``code`` por token, persiste e mostra a página de sucesso."""
    if error:
        logger.warning("oauth_authorization_denied", extra={"oauth_error": error})
        return JSONResponse(status_code=400, content={"error": "Erro na autorização"})
    if not code:
        return JSONResponse(
            status_code=400,
            content={"error": "Código de autorização não fornecido"},
        )

    await refresher.authorize(code)
    return HTMLResponse(AUTHORIZATION_SUCCESS_PAGE)


@router.post("/oauth/refresh")
async def refresh_oauth_token(refresher=Depends(get_token_refresher)) -> dict[str, Any]:
    """Renova o token armazenado (400 quando é preciso reautorizar)."""
    await refresher.refresh()
    return {"success": True, "message": "Token renovado com sucesso"}


@router.post("/webhook")
async def mercadopago_webhook(
    request: Request,
    event_log=Depends(get_event_log),
) -> PlainTextResponse:
    """Recebe notificações de pagamento e responde ``OK``.

    Apenas registra o evento; nenhum estado de agendamento é alterado.
    """
    body = await read_json_body(request)
    log_notification("mercadopago", request, body)
    payload = body if isinstance(body, dict) else {}
    data = payload.get("data") if isinstance(payload.get("data"), dict) else {}

    if payload.get("type") == "payment":
        logger.info("mercadopago_payment_notification", extra={"payment_id": data.get("id")})

    event_log.record(
        "webhook",
        {
            "source": "mercadopago",
            "notification_type": payload.get("type"),
            "resource_id": data.get("id"),
        },
    )
    return PlainTextResponse("OK")


@router.get("/logs", response_model=None)
async def payment_logs(
    request: Request,
    event_log=Depends(get_event_log),
) -> HTMLResponse | JSONResponse:
    """Últimos eventos de pagamento em JSON (ou HTML se o cliente pedir)."""
    entries = event_log.recent()
    if "text/html" in request.headers.get("accept", ""):
        return HTMLResponse(_render_logs(entries))
    return JSONResponse(content=entries)


def _render_logs(entries: list[dict[str, Any]]) -> str:
    blocks = "".join(
        '<div class="log-entry">'
        f'<span class="timestamp">{html.escape(str(entry.get("timestamp", "")))}</span> '
        f'<span class="type">{html.escape(str(entry.get("type", "")))}</span>'
        f'<pre class="data">{html.escape(json.dumps(entry, indent=2, ensure_ascii=False))}</pre>'
        "</div>"
        for entry in reversed(entries)
    )
    return (
        "<!DOCTYPE html><html><head><title>Logs de Pagamento</title></head>"
        f"<body><h1>Logs de Pagamento</h1>{blocks}</body></html>"
    )
