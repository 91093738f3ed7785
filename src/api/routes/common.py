"""Helpers compartilhados pelas rotas HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request

from config.logging import redact
from utils.errors import ValidationError

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Any:
    """Lê o corpo JSON; vazio vira ``{}`` e JSON malformado vira 400."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(
            "Corpo da requisição inválido",
            details="JSON malformado",
        ) from exc


def log_notification(source: str, request: Request, body: Any) -> None:
    """Registra notificação recebida com headers e corpo redigidos."""
    logger.info(
        "webhook_received",
        extra={
            "source": source,
            "headers": redact(dict(request.headers)),
            "body": redact(body),
        },
    )
