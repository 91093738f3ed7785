"""Normalização das respostas da API de Orders do PagBank.

- Pedido: link ``rel == "payment"`` ou, para PIX, o ``qr_codes[0]``
- Cobrança (fluxo em duas etapas): ``payment_method.payment_url``
- Consulta: status do pedido com rótulo em português
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.normalizers.common import (
    MISSING_PAYMENT_URL,
    find_link,
    missing_field,
    optional_str,
    require_json,
)
from app.domain.payment import OrderStatus, PaymentResult

if TYPE_CHECKING:
    from app.domain.payment import ProviderResponse

UNPARSEABLE_MESSAGE = "Erro ao processar resposta do PagBank"

STATUS_LABELS: dict[str, str] = {
    "AUTHORIZED": "Autorizado",
    "PAID": "Pago",
    "DECLINED": "Recusado",
    "CANCELED": "Cancelado",
    "PENDING": "Pendente",
}
UNKNOWN_STATUS_LABEL = "Status desconhecido"


def status_label(status: str | None) -> str:
    """Rótulo em português para o status do PagBank."""
    return STATUS_LABELS.get((status or "").upper(), UNKNOWN_STATUS_LABEL)


def _first_qr_code(data: dict[str, Any]) -> dict[str, Any] | None:
    qr_codes = data.get("qr_codes")
    if isinstance(qr_codes, list) and qr_codes and isinstance(qr_codes[0], dict):
        return qr_codes[0]
    return None


def normalize_order_response(response: ProviderResponse) -> PaymentResult:
    """Pedido criado → PaymentResult.

    O link de pagamento tem prioridade; sem ele, pedidos PIX usam o
    QR code (link PNG como redirect quando existir) e pedidos com
    cobrança em cartão já processada seguem sem redirect.

    Raises:
        UpstreamUnparseableError: Corpo não é JSON.
        ResponseShapeError: Nem link de pagamento, nem QR code, nem cobrança.
    """
    data = require_json(response, UNPARSEABLE_MESSAGE)
    qr_code = _first_qr_code(data)
    redirect_url = find_link(data.get("links"), "payment")

    if redirect_url is None and qr_code is not None:
        redirect_url = find_link(qr_code.get("links"), "QRCODE.PNG")
    has_charges = isinstance(data.get("charges"), list) and bool(data["charges"])
    if redirect_url is None and qr_code is None and not has_charges:
        raise missing_field(MISSING_PAYMENT_URL, data, "links[rel=payment]")

    return PaymentResult(
        success=True,
        provider="pagbank",
        redirect_url=redirect_url,
        provider_order_id=optional_str(data.get("id")),
        qr_code=qr_code,
        raw_provider_response=data,
    )


def normalize_payment_link_response(response: ProviderResponse) -> PaymentResult:
    """Pedido que exige link ``rel == "payment"`` (pagamento simples)."""
    data = require_json(response, UNPARSEABLE_MESSAGE)
    redirect_url = find_link(data.get("links"), "payment")
    if redirect_url is None:
        raise missing_field(MISSING_PAYMENT_URL, data, "links[rel=payment]")
    return PaymentResult(
        success=True,
        provider="pagbank",
        redirect_url=redirect_url,
        provider_order_id=optional_str(data.get("id")),
        raw_provider_response=data,
    )


def normalize_charge_response(response: ProviderResponse) -> PaymentResult:
    """Cobrança criada → PaymentResult com ``payment_method.payment_url``.

    ``order_id`` é anexado ao corpo pelo conector do fluxo em duas etapas.
    """
    data = require_json(response, UNPARSEABLE_MESSAGE)
    payment_method = data.get("payment_method")
    payment_url = (
        optional_str(payment_method.get("payment_url"))
        if isinstance(payment_method, dict)
        else None
    )
    if payment_url is None:
        raise missing_field(MISSING_PAYMENT_URL, data, "payment_method.payment_url")
    return PaymentResult(
        success=True,
        provider="pagbank",
        redirect_url=payment_url,
        provider_order_id=optional_str(data.get("order_id") or data.get("id")),
        raw_provider_response=data,
    )


def normalize_status_response(response: ProviderResponse, order_id: str) -> OrderStatus:
    """Pedido consultado → OrderStatus (status do pedido ou da 1ª cobrança)."""
    data = require_json(response, UNPARSEABLE_MESSAGE)
    status = optional_str(data.get("status"))
    if status is None:
        charges = data.get("charges")
        if isinstance(charges, list) and charges and isinstance(charges[0], dict):
            status = optional_str(charges[0].get("status"))
    if status is None:
        raise missing_field("Status não encontrado na resposta", data, "status")
    return OrderStatus(
        order_id=optional_str(data.get("id")) or order_id,
        status=status,
        label=status_label(status),
    )
