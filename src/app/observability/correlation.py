"""Correlation id por requisição (ContextVar).

Cada requisição HTTP recebe um id, lido do header ``x-correlation-id``
ou gerado, que aparece em todo log emitido durante o pipeline de
checkout e volta no header da resposta.

Uso:
    from app.observability import resolve_correlation_id, set_correlation_id

    correlation_id = resolve_correlation_id(request.headers.get("x-correlation-id"))
    token = set_correlation_id(correlation_id)
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 128

# Ids vindos do cliente só são aceitos se forem "seguros" para log e header
_SAFE_ID = re.compile(r"^[A-Za-z0-9._:-]+$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Novo correlation id (UUID v4)."""
    return str(uuid.uuid4())


def resolve_correlation_id(candidate: str | None) -> str:
    """Usa o id recebido se for seguro; caso contrário gera um novo.

    Exemplos:
        >>> resolve_correlation_id("pedido-123")
        'pedido-123'
        >>> len(resolve_correlation_id("com espaço\\n"))
        36
    """
    if candidate:
        candidate = candidate.strip()
        if len(candidate) <= MAX_CORRELATION_ID_LENGTH and _SAFE_ID.match(candidate):
            return candidate
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Correlation id do contexto atual ("" fora de uma requisição)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o id do contexto atual e devolve o token para reset."""
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
