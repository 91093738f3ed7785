"""Helpers comuns aos normalizers de resposta de provedor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from utils.errors import ResponseShapeError, UpstreamUnparseableError

if TYPE_CHECKING:
    from app.domain.payment import ProviderResponse

logger = logging.getLogger(__name__)

MISSING_PAYMENT_URL = "URL de pagamento não encontrada na resposta"


def require_json(response: ProviderResponse, message: str) -> dict[str, Any]:
    """Devolve o corpo JSON ou lança UpstreamUnparseableError com o texto bruto."""
    if response.data is None:
        logger.error(
            "provider_response_unparseable",
            extra={"status_code": response.status_code, "body_length": len(response.text)},
        )
        raise UpstreamUnparseableError(
            message,
            details=response.text,
            upstream_status=response.status_code,
        )
    return response.data


def missing_field(message: str, data: dict[str, Any], field: str) -> ResponseShapeError:
    """ResponseShapeError para campo esperado ausente (drift de integração)."""
    logger.error(
        "provider_response_shape_error",
        extra={"missing_field": field, "keys": sorted(data.keys())},
    )
    return ResponseShapeError(message, details=f"Campo ausente: {field}")


def optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def find_link(links: Any, rel: str) -> str | None:
    """Primeiro ``href`` com ``rel`` igual (case-insensitive) em ``links[]``."""
    if not isinstance(links, list):
        return None
    for link in links:
        if isinstance(link, dict) and str(link.get("rel", "")).lower() == rel.lower():
            href = link.get("href")
            if href:
                return str(href)
    return None
