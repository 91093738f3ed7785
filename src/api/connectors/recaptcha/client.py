"""Verificação server-side do Google reCAPTCHA (siteverify)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.normalizers.common import require_json
from utils.errors import ConfigurationError, ValidationError

if TYPE_CHECKING:
    from app.protocols.http_client import PaymentHttpClientProtocol
    from config.settings import RecaptchaSettings

logger = logging.getLogger(__name__)


class RecaptchaVerificationError(ValidationError):
    """Token recusado pelo Google (details = error-codes)."""


class RecaptchaClient:
    """Cliente do endpoint ``siteverify``."""

    def __init__(
        self,
        settings: RecaptchaSettings,
        http_client: PaymentHttpClientProtocol,
    ) -> None:
        self._settings = settings
        self._http = http_client

    async def verify(self, token: str) -> dict[str, Any]:
        """Verifica o token e devolve a resposta completa do Google.

        Raises:
            ConfigurationError: RECAPTCHA_SECRET_KEY ausente.
            RecaptchaVerificationError: ``success`` falso.
        """
        if not self._settings.secret_key:
            raise ConfigurationError(
                "reCAPTCHA não configurado",
                details="RECAPTCHA_SECRET_KEY ausente",
            )

        response = await self._http.request(
            "POST",
            self._settings.verify_url,
            data={"secret": self._settings.secret_key, "response": token},
        )
        data = require_json(response, "Erro ao verificar reCAPTCHA")
        if not data.get("success"):
            logger.warning(
                "recaptcha_rejected",
                extra={"error_codes": data.get("error-codes", [])},
            )
            raise RecaptchaVerificationError(
                "Verificação de segurança falhou",
                details=data.get("error-codes", []),
            )

        logger.info(
            "recaptcha_verified",
            extra={"hostname": data.get("hostname"), "score": data.get("score")},
        )
        return data
