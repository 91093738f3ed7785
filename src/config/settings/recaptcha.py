"""Settings do Google reCAPTCHA (verificação server-side)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

RECAPTCHA_VERIFY_URL: str = "https://www.google.com/recaptcha/api/siteverify"


@dataclass(frozen=True)
class RecaptchaSettings:
    """Configurações do reCAPTCHA.

    Attributes:
        secret_key: Chave secreta do site
        verify_url: Endpoint siteverify
        request_timeout_seconds: Timeout para a verificação
    """

    secret_key: str = ""
    verify_url: str = RECAPTCHA_VERIFY_URL
    request_timeout_seconds: float = 10.0

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.secret_key:
            errors.append("RECAPTCHA_SECRET_KEY não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("RECAPTCHA_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> RecaptchaSettings:
    """Carrega RecaptchaSettings a partir de variáveis de ambiente."""
    return RecaptchaSettings(
        secret_key=os.getenv("RECAPTCHA_SECRET_KEY", ""),
        verify_url=os.getenv("RECAPTCHA_VERIFY_URL", RECAPTCHA_VERIFY_URL),
        request_timeout_seconds=float(
            os.getenv("RECAPTCHA_REQUEST_TIMEOUT_SECONDS", "10")
        ),
    )


@lru_cache(maxsize=1)
def get_recaptcha_settings() -> RecaptchaSettings:
    """Retorna instância cacheada de RecaptchaSettings."""
    return _load_from_env()
