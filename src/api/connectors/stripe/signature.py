"""Verificação do header ``Stripe-Signature`` e parse do evento.

Formato do header: ``t=<unix>,v1=<hex>[,v1=<hex>...]``. A assinatura é
HMAC-SHA256 de ``"{t}.{payload}"`` com o secret do endpoint; o
timestamp precisa estar dentro da tolerância (padrão 5 minutos).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from typing import Any

from utils.errors import ValidationError

DEFAULT_TOLERANCE_SECONDS = 300


class StripeSignatureError(ValidationError):
    """Assinatura ausente, malformada, expirada ou divergente."""


class InvalidEventError(ValidationError):
    """Corpo do webhook não é um objeto JSON."""


def _parse_header(header: str) -> tuple[int | None, list[str]]:
    timestamp: int | None = None
    signatures: list[str] = []
    for item in header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None, []
        elif key == "v1":
            signatures.append(value)
    return timestamp, signatures


def compute_signature(payload: bytes, timestamp: int, secret: str) -> str:
    """HMAC-SHA256 hex de ``{timestamp}.{payload}``."""
    signed = f"{timestamp}.".encode() + payload
    return hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()


def verify_stripe_signature(
    payload: bytes,
    header: str | None,
    secret: str,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    now: float | None = None,
) -> None:
    """Valida a assinatura do webhook.

    Raises:
        StripeSignatureError: Header ausente/malformado, fora da tolerância
            ou sem nenhuma assinatura v1 válida.
    """
    if not header:
        raise StripeSignatureError("Webhook Error", details="Header Stripe-Signature ausente")

    timestamp, signatures = _parse_header(header)
    if timestamp is None or not signatures:
        raise StripeSignatureError("Webhook Error", details="Header Stripe-Signature malformado")

    current = time.time() if now is None else now
    if abs(current - timestamp) > tolerance_seconds:
        raise StripeSignatureError("Webhook Error", details="Timestamp fora da tolerância")

    expected = compute_signature(payload, timestamp, secret)
    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise StripeSignatureError("Webhook Error", details="Assinatura inválida")


def parse_stripe_event(
    payload: bytes,
    header: str | None,
    secret: str,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    now: float | None = None,
) -> dict[str, Any]:
    """Verifica a assinatura (quando há secret) e devolve o evento.

    Raises:
        StripeSignatureError: Assinatura inválida.
        InvalidEventError: JSON inválido ou não-objeto.
    """
    if secret:
        verify_stripe_signature(payload, header, secret, tolerance_seconds, now)

    try:
        event = json.loads(payload or b"{}")
    except json.JSONDecodeError as exc:
        raise InvalidEventError("Webhook Error", details="JSON inválido") from exc

    if not isinstance(event, dict):
        raise InvalidEventError("Webhook Error", details="Evento deve ser um objeto")
    return event
