"""Formatter JSON dos logs do serviço de pagamentos.

Todo registro sai como um objeto JSON com os campos de
``REQUIRED_LOG_FIELDS`` (renomeados por ``FIELD_RENAME_MAP``), sempre na
mesma ordem. Valores de ``extra`` que o json não serializa (``Decimal``
de valores monetários, datas) viram string.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pythonjsonlogger.json import JsonFormatter

# Ordem das chaves no JSON de saída
LOG_FIELD_ORDER: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

REQUIRED_LOG_FIELDS = frozenset(LOG_FIELD_ORDER)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def json_default(value: Any) -> Any:
    """Serializa tipos que aparecem em ``extra`` e o json não conhece."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return repr(value)


def create_json_formatter() -> JsonFormatter:
    """Formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "2026-02-02 10:30:00,123", "level": "INFO",
         "logger": "app.use_cases.checkout.create_checkout",
         "message": "checkout_created", "correlation_id": "abc-123",
         "service": "dancing_pagamentos", "provider": "pagbank"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELD_ORDER),
        rename_fields=FIELD_RENAME_MAP,
        json_default=json_default,
        json_ensure_ascii=False,
    )
