"""Helpers de parsing de campos do corpo HTTP.

Funções puras: recebem valores crus do JSON e devolvem tipos do domínio
ou lançam ``ValidationError`` com o campo ofensor em ``fields``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from api.payload_builders.common import to_minor_units
from app.domain.booking import CardData
from utils.errors import ValidationError

_NON_DIGITS = re.compile(r"\D")

# Teto por cobrança (BRL) e por item
MAX_AMOUNT = Decimal("1000000")
MAX_QUANTITY = 10_000


def is_blank(value: Any) -> bool:
    """True para None, string vazia/espaços e coleções vazias."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple)):
        return len(value) == 0
    return False


def missing_fields(body: dict[str, Any], names: tuple[str, ...]) -> list[str]:
    """Lista os campos obrigatórios ausentes/vazios, na ordem informada."""
    return [name for name in names if is_blank(body.get(name))]


def parse_amount(value: Any, field: str) -> Decimal:
    """Converte valor monetário (número ou string) em Decimal cobrável.

    Raises:
        ValidationError: Valor ausente, não numérico, não finito, abaixo de
            1 centavo (após arredondamento) ou acima de ``MAX_AMOUNT``.
    """
    if isinstance(value, bool) or value is None:
        raise _invalid_amount(field)
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        raise _invalid_amount(field) from None
    if not amount.is_finite() or amount <= 0:
        raise _invalid_amount(field)
    return ensure_chargeable(amount, field)


def ensure_chargeable(amount: Decimal, field: str) -> Decimal:
    """Exige ao menos 1 centavo e no máximo ``MAX_AMOUNT``."""
    if amount > MAX_AMOUNT or to_minor_units(amount) < 1:
        raise _invalid_amount(field)
    return amount


def parse_quantity(value: Any, field: str) -> int:
    """Quantidade inteira entre 1 e ``MAX_QUANTITY`` (default 1 quando ausente)."""
    if value is None:
        return 1
    if isinstance(value, bool):
        raise _invalid_quantity(field)
    try:
        quantity = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise _invalid_quantity(field) from None
    if not quantity.is_finite() or quantity != quantity.to_integral_value():
        raise _invalid_quantity(field)
    if not 1 <= quantity <= MAX_QUANTITY:
        raise _invalid_quantity(field)
    return int(quantity)


def digits_only(value: Any) -> str:
    """Remove tudo que não for dígito (CPF/CNPJ, telefone)."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def text(value: Any) -> str:
    """Normaliza texto opcional (None → "")."""
    if value is None:
        return ""
    return str(value).strip()


def parse_card(raw: Any) -> CardData | None:
    """Converte ``cardData`` (camelCase do front) em CardData.

    Retorna None quando o cartão não foi enviado.

    Raises:
        ValidationError: Cartão enviado com campos faltando.
    """
    if is_blank(raw):
        return None
    if not isinstance(raw, dict):
        raise ValidationError(
            "Dados do cartão inválidos",
            details="cardData deve ser um objeto",
            fields=["cardData"],
        )

    values = {
        "number": digits_only(raw.get("number")),
        "exp_month": text(raw.get("expMonth", raw.get("exp_month"))),
        "exp_year": text(raw.get("expYear", raw.get("exp_year"))),
        "security_code": text(raw.get("securityCode", raw.get("security_code"))),
        "holder_name": text(raw.get("holderName", raw.get("holder_name"))),
    }
    missing = [f"cardData.{key}" for key, item in values.items() if not item]
    if missing:
        raise ValidationError(
            "Dados do cartão inválidos",
            details=f"Campos obrigatórios: {', '.join(missing)}",
            fields=missing,
        )
    return CardData(**values)


def _invalid_amount(field: str) -> ValidationError:
    return ValidationError(
        "Valor inválido",
        details=f"{field} deve ser um número entre 0,01 e {MAX_AMOUNT}",
        fields=[field],
    )


def _invalid_quantity(field: str) -> ValidationError:
    return ValidationError(
        "Quantidade inválida",
        details=f"{field} deve ser um inteiro entre 1 e {MAX_QUANTITY}",
        fields=[field],
    )
