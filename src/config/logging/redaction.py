"""Redação de segredos e PII antes da escrita de logs.

Responsabilidade:
- Mascarar tokens, dados de cartão, CPF/CNPJ e e-mails
- Percorrer estruturas aninhadas (dict/list) vindas de ``extra``
- Garantir determinismo (mesma entrada = mesma saída)

Payloads de provedores e corpos de requisição só chegam aos logs
depois de passar por ``redact``.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Any, Final

REDACTED: Final[str] = "[REDACTED]"

# Chaves cujo valor nunca pode aparecer em log (comparação case-insensitive)
SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "authorization",
        "access_token",
        "refresh_token",
        "client_secret",
        "token",
        "secret",
        "password",
        "api_key",
        "recaptchatoken",
        "x-idempotency-key",
        "carddata",
        "card",
        "number",
        "security_code",
        "securitycode",
        "cvv",
        "ccv",
        "exp_month",
        "exp_year",
        "expmonth",
        "expyear",
        "tax_id",
        "customer_tax_id",
        "stripe-signature",
    }
)

# Ordem importa: cartão antes de CPF/CNPJ
_PATTERNS: Final[dict[str, Pattern[str]]] = {
    "bearer": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+"),
    "card": re.compile(r"\b(?:\d[ -]?){12,18}\d\b"),
    "cnpj": re.compile(r"\b\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}\b"),
    "cpf": re.compile(r"\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b"),
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
}

_MASKS: Final[dict[str, str]] = {
    "bearer": f"Bearer {REDACTED}",
    "card": "[CARD]",
    "cnpj": "[CNPJ]",
    "cpf": "[CPF]",
    "email": "[EMAIL]",
}

_MAX_DEPTH = 8


def sanitize_text(text: str) -> str:
    """Mascara tokens e PII em texto livre.

    Exemplos:
        >>> sanitize_text("Authorization: Bearer abc.def")
        'Authorization: Bearer [REDACTED]'

        >>> sanitize_text("contato ana@x.com")
        'contato [EMAIL]'
    """
    if not text:
        return text

    result = text
    for kind, pattern in _PATTERNS.items():
        result = pattern.sub(_MASKS[kind], result)
    return result


def is_sensitive_key(key: object) -> bool:
    """Retorna True se a chave identifica um valor secreto."""
    return isinstance(key, str) and key.lower() in SENSITIVE_KEYS


def redact(value: Any, _depth: int = 0) -> Any:
    """Retorna cópia de ``value`` com segredos e PII mascarados.

    Dicts têm valores de chaves sensíveis substituídos por ``[REDACTED]``;
    strings passam por ``sanitize_text``; demais tipos são preservados.
    """
    if _depth > _MAX_DEPTH:
        return REDACTED

    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_key(key) else redact(item, _depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item, _depth + 1) for item in value]
    if isinstance(value, str):
        return sanitize_text(value)
    return value
