"""Modelos de dominio do pedido de aula (agendamento + pagamento).

O ``BookingRequest`` é criado por requisição a partir do corpo HTTP já
validado, e descartado depois da resposta. Nada aqui conhece provedor.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["pix", "credit_card"]

DEFAULT_TAX_ID = "12345678909"
DEFAULT_ITEM_NAME = "Aula Individual de Patinação"


class CardData(BaseModel):
    """Dados de cartão repassados ao provedor (nunca logados)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    number: str = Field(..., min_length=1, description="Número do cartão.")
    exp_month: str = Field(..., min_length=1, description="Mês de validade (MM).")
    exp_year: str = Field(..., min_length=1, description="Ano de validade (YYYY).")
    security_code: str = Field(..., min_length=1, description="CVV.")
    holder_name: str = Field(..., min_length=1, description="Nome impresso no cartão.")


class LineItem(BaseModel):
    """Item cobrado (em reais, antes da conversão para centavos)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Nome exibido no checkout.")
    quantity: int = Field(default=1, ge=1, description="Quantidade.")
    unit_amount: Decimal = Field(..., gt=0, description="Preço unitário em BRL.")


class BookingRequest(BaseModel):
    """Pedido de pagamento de uma aula, normalizado e imutável."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    student_name: str = Field(..., min_length=1, description="Nome do aluno/pagador.")
    email: str = Field(..., min_length=1, description="Email do pagador.")
    amount: Decimal = Field(..., gt=0, description="Valor total em BRL.")
    phone: str = Field(default="", description="Telefone do pagador.")
    tax_id: str = Field(default=DEFAULT_TAX_ID, description="CPF/CNPJ (só dígitos).")
    scheduled_date: str = Field(default="", description="Data da aula (YYYY-MM-DD).")
    scheduled_time: str = Field(default="", description="Horário da aula (HH:MM).")
    instructor_id: str = Field(default="", description="Professor(a) da aula.")
    items: tuple[LineItem, ...] = Field(default=(), description="Itens cobrados.")
    payment_method: PaymentMethod = Field(default="pix", description="pix|credit_card.")
    card: CardData | None = Field(default=None, description="Dados do cartão.")
    description: str = Field(default="", description="Descrição livre.")

    @property
    def line_items(self) -> tuple[LineItem, ...]:
        """Itens informados ou, na ausência, uma aula com o valor total."""
        if self.items:
            return self.items
        return (LineItem(name=DEFAULT_ITEM_NAME, unit_amount=self.amount),)

    @property
    def is_card_payment(self) -> bool:
        return self.payment_method == "credit_card"


__all__ = [
    "DEFAULT_ITEM_NAME",
    "DEFAULT_TAX_ID",
    "BookingRequest",
    "CardData",
    "LineItem",
    "PaymentMethod",
]
