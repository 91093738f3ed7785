"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização
    configure_logging(level="INFO", service_name="dancing_pagamentos")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("provider_invoked", extra={"latency_ms": 42})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter, RedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    LOG_FIELD_ORDER,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)
from config.logging.redaction import redact, sanitize_text

__all__ = [
    "FIELD_RENAME_MAP",
    "LOG_FIELD_ORDER",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "CorrelationIdFilter",
    "RedactionFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    # Redação
    "redact",
    "sanitize_text",
]
