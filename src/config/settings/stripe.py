"""Settings específicas do Stripe (Checkout Sessions e webhook)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class StripeSettings:
    """Configurações do Stripe.

    Attributes:
        secret_key: Chave secreta (sk_...)
        webhook_secret: Secret de assinatura do webhook (whsec_...)
        success_url: URL de retorno após pagamento (sem query)
        cancel_url: URL de retorno em cancelamento
        webhook_tolerance_seconds: Janela aceita para o timestamp assinado
        request_timeout_seconds: Timeout da chamada ao SDK
    """

    secret_key: str = ""
    webhook_secret: str = ""
    success_url: str = ""
    cancel_url: str = ""
    webhook_tolerance_seconds: int = 300
    request_timeout_seconds: float = 15.0

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Stripe.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.secret_key:
            errors.append("STRIPE_SECRET_KEY não configurado")

        if self.webhook_tolerance_seconds <= 0:
            errors.append("STRIPE_WEBHOOK_TOLERANCE_SECONDS deve ser > 0")

        if self.request_timeout_seconds <= 0:
            errors.append("STRIPE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> StripeSettings:
    """Carrega StripeSettings a partir de variáveis de ambiente."""
    return StripeSettings(
        secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
        webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET", ""),
        success_url=os.getenv("STRIPE_SUCCESS_URL", ""),
        cancel_url=os.getenv("STRIPE_CANCEL_URL", ""),
        webhook_tolerance_seconds=int(
            os.getenv("STRIPE_WEBHOOK_TOLERANCE_SECONDS", "300")
        ),
        request_timeout_seconds=float(
            os.getenv(
                "STRIPE_REQUEST_TIMEOUT_SECONDS",
                os.getenv("PAYMENT_REQUEST_TIMEOUT_SECONDS", "15"),
            )
        ),
    )


@lru_cache(maxsize=1)
def get_stripe_settings() -> StripeSettings:
    """Retorna instância cacheada de StripeSettings."""
    return _load_from_env()
