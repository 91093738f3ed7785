"""Validação dos corpos de requisição das rotas de pagamento.

Cada função recebe o corpo cru (dict) de um endpoint e devolve um tipo
bem formado do domínio, ou lança ``ValidationError`` (HTTP 400) com
``error``/``details`` no formato exposto ao cliente. Nenhuma chamada de
rede acontece aqui.

Uso:
    from api.validators.checkout import validate_simple_payment

    booking = validate_simple_payment({"nome": "Ana", "email": "ana@x.com", "valor": 50})
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from api.validators.checkout.fields import (
    digits_only,
    is_blank,
    missing_fields,
    ensure_chargeable,
    parse_amount,
    parse_card,
    parse_quantity,
    text,
)
from app.domain.booking import DEFAULT_TAX_ID, BookingRequest, LineItem
from utils.errors import ValidationError

PAYMENT_METHODS = frozenset({"pix", "credit_card"})
SIMPLE_PAYMENT_ITEM_NAME = "Aula de Patinação"


@dataclass(frozen=True, slots=True)
class AgendamentoCheckout:
    """Checkout de aula validado, ainda pendente de reCAPTCHA."""

    booking: BookingRequest
    recaptcha_token: str


def _require_object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationError(
            "Corpo da requisição inválido",
            details="O corpo deve ser um objeto JSON",
        )
    return body


def _tax_id_or_default(value: Any) -> str:
    return digits_only(value) or DEFAULT_TAX_ID


# ──────────────────────────────────────────────────────────────
# Mercado Pago
# ──────────────────────────────────────────────────────────────


def validate_preference_request(body: Any) -> BookingRequest:
    """Valida ``{items[], payer}`` da preferência do Mercado Pago.

    Itens aceitam o formato do Mercado Pago (title/unit_price) ou o
    formato interno (name/unit_amount).
    """
    body = _require_object(body)
    raw_items = body.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError(
            "Items inválidos",
            details="O array de items é obrigatório e não pode estar vazio",
            fields=["items"],
        )

    items = tuple(_parse_preference_item(raw, index) for index, raw in enumerate(raw_items))
    payer = body.get("payer") if isinstance(body.get("payer"), dict) else {}
    email = text(payer.get("email"))
    if not email:
        raise ValidationError(
            "Dados do pagador inválidos",
            details="payer.email é obrigatório",
            fields=["payer.email"],
        )

    total = ensure_chargeable(
        sum((item.unit_amount * item.quantity for item in items), Decimal("0")), "items"
    )
    name = text(payer.get("name")) or " ".join(
        part for part in (text(payer.get("first_name")), text(payer.get("surname"))) if part
    )
    return BookingRequest(
        student_name=name or email,
        email=email,
        amount=total,
        tax_id=_tax_id_or_default(_payer_tax_id(payer)),
        items=items,
    )


def _parse_preference_item(raw: Any, index: int) -> LineItem:
    prefix = f"items[{index}]"
    if not isinstance(raw, dict):
        raise ValidationError(
            "Items inválidos",
            details=f"{prefix} deve ser um objeto",
            fields=[prefix],
        )
    name = text(raw.get("title") or raw.get("name"))
    if not name:
        raise ValidationError(
            "Items inválidos",
            details=f"{prefix}.title é obrigatório",
            fields=[f"{prefix}.title"],
        )
    price = raw.get("unit_price", raw.get("unit_amount", raw.get("amount")))
    return LineItem(
        name=name,
        quantity=parse_quantity(raw.get("quantity"), f"{prefix}.quantity"),
        unit_amount=parse_amount(price, f"{prefix}.unit_price"),
    )


def _payer_tax_id(payer: dict[str, Any]) -> Any:
    identification = payer.get("identification")
    if isinstance(identification, dict) and identification.get("number"):
        return identification["number"]
    return payer.get("tax_id")


# ──────────────────────────────────────────────────────────────
# PagBank
# ──────────────────────────────────────────────────────────────


def validate_agendamento_checkout(body: Any) -> AgendamentoCheckout:
    """Valida ``{agendamento, paymentMethod, cardData?, recaptchaToken}``.

    Cartão informado sem ``paymentMethod == "credit_card"`` é ignorado;
    ``credit_card`` sem ``cardData`` segue como PIX.
    """
    body = _require_object(body)
    missing = missing_fields(body, ("agendamento", "paymentMethod", "recaptchaToken"))
    if missing:
        raise ValidationError(
            "Dados incompletos",
            details="agendamento, paymentMethod e recaptchaToken são obrigatórios",
            fields=missing,
        )

    agendamento = body["agendamento"]
    if not isinstance(agendamento, dict):
        raise ValidationError(
            "Dados incompletos",
            details="agendamento deve ser um objeto",
            fields=["agendamento"],
        )

    method = text(body["paymentMethod"]).lower()
    if method not in PAYMENT_METHODS:
        raise ValidationError(
            "Método de pagamento inválido",
            details="paymentMethod deve ser 'pix' ou 'credit_card'",
            fields=["paymentMethod"],
        )

    missing = [
        f"agendamento.{name}"
        for name in missing_fields(agendamento, ("nomeAluno", "email", "valor"))
    ]
    if missing:
        raise ValidationError(
            "Dados incompletos",
            details="nomeAluno, email e valor do agendamento são obrigatórios",
            fields=missing,
        )

    card = parse_card(body.get("cardData")) if method == "credit_card" else None
    booking = BookingRequest(
        student_name=text(agendamento["nomeAluno"]),
        email=text(agendamento["email"]),
        amount=parse_amount(agendamento["valor"], "agendamento.valor"),
        phone=digits_only(agendamento.get("telefone")),
        tax_id=_tax_id_or_default(agendamento.get("cpf")),
        scheduled_date=text(agendamento.get("data")),
        scheduled_time=text(agendamento.get("horario")),
        instructor_id=text(agendamento.get("professorId") or agendamento.get("professor")),
        payment_method="credit_card" if card is not None else "pix",
        card=card,
    )
    return AgendamentoCheckout(booking=booking, recaptcha_token=text(body["recaptchaToken"]))


def validate_simple_payment(body: Any) -> BookingRequest:
    """Valida ``{nome, email, valor}`` do pagamento simples do PagBank."""
    body = _require_object(body)
    missing = missing_fields(body, ("nome", "email", "valor"))
    if missing:
        raise ValidationError(
            "Dados inválidos",
            details="Nome, email e valor são obrigatórios",
            fields=missing,
        )
    amount = parse_amount(body["valor"], "valor")
    return BookingRequest(
        student_name=text(body["nome"]),
        email=text(body["email"]),
        amount=amount,
        tax_id=_tax_id_or_default(body.get("cpf")),
        items=(LineItem(name=SIMPLE_PAYMENT_ITEM_NAME, unit_amount=amount),),
        description=text(body.get("descricao")),
    )


def validate_payment_status_query(order_id: Any) -> str:
    """Valida o parâmetro ``orderId`` da consulta de status."""
    if is_blank(order_id):
        raise ValidationError(
            "orderId é obrigatório",
            details="Informe o parâmetro orderId",
            fields=["orderId"],
        )
    return text(order_id)


# ──────────────────────────────────────────────────────────────
# PagSeguro / Stripe
# ──────────────────────────────────────────────────────────────


def validate_order_request(body: Any) -> BookingRequest:
    """Valida ``{amount, payer, items}`` (PagSeguro create-order e Stripe)."""
    body = _require_object(body)
    missing = missing_fields(body, ("amount", "payer", "items"))
    if missing:
        raise ValidationError(
            "Dados incompletos",
            details="amount, payer e items são obrigatórios",
            fields=missing,
        )

    payer = body["payer"]
    raw_items = body["items"]
    if not isinstance(payer, dict) or not isinstance(raw_items, list):
        raise ValidationError(
            "Dados incompletos",
            details="payer deve ser um objeto e items uma lista",
            fields=["payer", "items"],
        )

    missing = [f"payer.{name}" for name in missing_fields(payer, ("name", "email"))]
    if missing:
        raise ValidationError(
            "Dados incompletos",
            details="payer.name e payer.email são obrigatórios",
            fields=missing,
        )

    amount = parse_amount(body["amount"], "amount")
    items = tuple(_parse_order_item(raw, index, amount) for index, raw in enumerate(raw_items))
    return BookingRequest(
        student_name=text(payer["name"]),
        email=text(payer["email"]),
        amount=amount,
        phone=digits_only(payer.get("phone")),
        tax_id=_tax_id_or_default(payer.get("tax_id")),
        items=items,
    )


def _parse_order_item(raw: Any, index: int, fallback_amount: Decimal) -> LineItem:
    prefix = f"items[{index}]"
    if not isinstance(raw, dict):
        raise ValidationError(
            "Dados incompletos",
            details=f"{prefix} deve ser um objeto",
            fields=[prefix],
        )
    price = raw.get("amount", raw.get("unit_amount"))
    return LineItem(
        name=text(raw.get("name")) or "Pagamento Dancing Patinação",
        quantity=parse_quantity(raw.get("quantity"), f"{prefix}.quantity"),
        unit_amount=fallback_amount if price is None else parse_amount(price, f"{prefix}.amount"),
    )


# ──────────────────────────────────────────────────────────────
# reCAPTCHA
# ──────────────────────────────────────────────────────────────


def validate_recaptcha_request(body: Any) -> str:
    """Valida ``{recaptchaToken}`` e devolve o token."""
    body = _require_object(body)
    if is_blank(body.get("recaptchaToken")):
        raise ValidationError(
            "Token do reCAPTCHA é obrigatório",
            details="Informe recaptchaToken",
            fields=["recaptchaToken"],
        )
    return text(body["recaptchaToken"])
