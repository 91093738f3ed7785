"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_mercadopago_settings,
    get_pagbank_settings,
    get_recaptcha_settings,
    get_stripe_settings,
    get_token_store_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "dancing_pagamentos"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    Configura logging estruturado JSON com correlation_id e redação.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de configuração de todas as settings, prefixados pela origem."""
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"token_store: {error}" for error in get_token_store_settings().validate(base))
    errors.extend(f"mercadopago: {error}" for error in get_mercadopago_settings().validate())
    errors.extend(f"pagbank: {error}" for error in get_pagbank_settings().validate())
    errors.extend(f"stripe: {error}" for error in get_stripe_settings().validate())
    errors.extend(f"recaptcha: {error}" for error in get_recaptcha_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
