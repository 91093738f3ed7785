"""Configuração centralizada de logging.

Logging estruturado JSON para o serviço de pagamentos:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Redação de segredos e PII (tokens, cartão, CPF, e-mail)
- Loggers de bibliotecas HTTP limitados a WARNING (URLs com query não vazam)

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap)
    configure_logging(level="INFO", service_name="dancing_pagamentos")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("checkout_created", extra={"provider": "pagbank"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, RedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "dancing_pagamentos"

# httpx loga a URL completa de cada request em INFO
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "urllib3", "google.auth")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura o handler raiz (JSON + correlation id + redação).

    Chamada uma vez no startup; chamadas seguintes substituem o handler.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(RedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    quiet_level = max(logging.WARNING, logging.getLevelName(level_upper))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Logger do módulo; o handler raiz injeta contexto e mascara dados."""
    return logging.getLogger(name)
