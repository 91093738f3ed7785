"""Helpers compartilhados pelos builders de payload.

- Conversão BRL → centavos com arredondamento ROUND_HALF_UP
- Chaves de idempotência únicas por chamada
- Reference ids baseados em epoch (ms)
"""

from __future__ import annotations

import secrets
import string
import time
from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("100")
_TWO_PLACES = Decimal("0.01")
_KEY_ALPHABET = string.ascii_lowercase + string.digits
_KEY_SUFFIX_LENGTH = 8


def to_minor_units(amount: Decimal | int | float | str) -> int:
    """Converte valor em reais para centavos (inteiro).

    Usa Decimal para evitar erro de ponto flutuante e ROUND_HALF_UP
    (0.005 arredonda para cima).

    Exemplos:
        >>> to_minor_units(Decimal("50"))
        5000
        >>> to_minor_units("10.005")
        1001
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * _CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_currency(amount: Decimal) -> float:
    """Valor em reais com duas casas (APIs que recebem unidade, não centavos)."""
    return float(amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def epoch_ms() -> int:
    return int(time.time() * 1000)


def reference_id(prefix: str) -> str:
    """Reference id no formato ``{PREFIX}_{epoch_ms}``."""
    return f"{prefix}_{epoch_ms()}"


def generate_idempotency_key(prefix: str = "order") -> str:
    """Gera chave ``{prefix}-{epoch_ms}-{aleatório}`` (letras, números, hífen).

    O sufixo aleatório vem de ``secrets``: duas chamadas no mesmo
    milissegundo ainda geram chaves distintas.
    """
    suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(_KEY_SUFFIX_LENGTH))
    return f"{prefix}-{epoch_ms()}-{suffix}"
