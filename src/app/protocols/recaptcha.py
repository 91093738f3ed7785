"""Protocolo de verificação de reCAPTCHA."""

from __future__ import annotations

from typing import Any, Protocol


class RecaptchaVerifierProtocol(Protocol):
    """Verifica um token e devolve a resposta do siteverify."""

    async def verify(self, token: str) -> dict[str, Any]: ...
