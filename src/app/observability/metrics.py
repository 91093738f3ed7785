"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (Cloud Logging, BigQuery, etc).

Métricas suportadas:
- Latência: tempo de cada chamada a provedor (por provedor/operação)
- Resultado de pagamento: counter de checkouts por provedor e desfecho

Uso:
    from app.observability.metrics import record_latency, record_payment_outcome

    start = time.perf_counter()
    # ... chamada ao provedor ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("pagbank", "create_order", latency_ms)

    record_payment_outcome("pagbank", "success")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "pagbank", "mercadopago_oauth")
        operation: Nome da operação (ex: "create_order", "refresh")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_payment_outcome(
    provider: str,
    outcome: str,
    correlation_id: str | None = None,
    error_type: str | None = None,
) -> None:
    """Registra desfecho de um checkout.

    Args:
        provider: Provedor (mercadopago, pagbank, stripe)
        outcome: "success" ou "failure"
        correlation_id: ID de correlação para rastreamento
        error_type: Nome da exceção quando outcome == "failure"
    """
    extra: dict[str, str | None] = {
        "metric_type": "payment_outcome",
        "provider": provider,
        "outcome": outcome,
        "correlation_id": correlation_id,
    }
    if error_type:
        extra["error_type"] = error_type

    logger.info("metric_payment_outcome", extra=extra)
