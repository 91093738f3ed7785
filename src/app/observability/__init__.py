"""Observabilidade — logs estruturados, correlation id, métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import resolve_correlation_id, set_correlation_id
    from app.observability import record_latency, record_payment_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_latency, record_payment_outcome

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_payment_outcome",
    "reset_correlation_id",
    "resolve_correlation_id",
    "set_correlation_id",
]
