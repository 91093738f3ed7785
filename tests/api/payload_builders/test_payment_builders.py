"""Testes dos builders de payload (centavos, idempotência, formato)."""

from __future__ import annotations

import re
from decimal import Decimal

import pytest

from api.payload_builders import generate_idempotency_key, to_minor_units
from api.payload_builders.mercadopago import build_preference_payload
from api.payload_builders.pagbank import (
    build_charge_payload,
    build_order_payload,
    build_two_step_order_payload,
)
from api.payload_builders.stripe import build_checkout_session_payload
from api.validators.checkout import validate_order_request, validate_simple_payment
from app.domain.booking import BookingRequest, CardData

IDEMPOTENCY_KEY_PATTERN = re.compile(r"^[a-z]+-\d+-[a-z0-9]+$")


def _card_booking() -> BookingRequest:
    return BookingRequest(
        student_name="Ana",
        email="ana@x.com",
        amount=Decimal("80"),
        phone="11999998888",
        payment_method="credit_card",
        card=CardData(
            number="4111111111111111",
            exp_month="12",
            exp_year="2030",
            security_code="123",
            holder_name="ANA",
        ),
    )


class TestMinorUnits:
    """Conversão BRL → centavos."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("50"), 5000),
            (Decimal("0.1"), 10),
            (Decimal("10.005"), 1001),
            (Decimal("10.004"), 1000),
            ("19.99", 1999),
            (0.29, 29),
        ],
    )
    def test_round_half_up(self, amount, expected) -> None:
        assert to_minor_units(amount) == expected


class TestIdempotencyKeys:
    """Chaves de idempotência."""

    def test_format(self) -> None:
        assert IDEMPOTENCY_KEY_PATTERN.match(generate_idempotency_key("order"))

    def test_identical_requests_get_distinct_keys(self) -> None:
        booking = validate_simple_payment({"nome": "Ana", "email": "ana@x.com", "valor": 50})
        keys = {build_order_payload(booking).idempotency_key for _ in range(50)}
        assert len(keys) == 50


class TestPagBankBuilders:
    """Pedidos e cobranças do PagBank."""

    def test_simple_payment_amount_in_cents(self) -> None:
        booking = validate_simple_payment({"nome": "Ana", "email": "ana@x.com", "valor": 50})

        payload = build_order_payload(booking)

        assert payload.provider == "pagbank"
        assert payload.body["items"][0]["unit_amount"] == 5000
        assert payload.body["qr_codes"] == [{"amount": {"value": 5000}}]
        assert payload.body["reference_id"].startswith("AULA_")
        assert "charges" not in payload.body

    def test_card_order_embeds_charge(self) -> None:
        payload = build_order_payload(_card_booking(), notification_url="https://api/wh")

        charge = payload.body["charges"][0]
        assert charge["amount"] == {"value": 8000, "currency": "BRL"}
        assert charge["payment_method"]["installments"] == 1
        assert charge["payment_method"]["card"]["holder"] == {"name": "ANA"}
        assert payload.body["notification_urls"] == ["https://api/wh"]
        assert payload.body["customer"]["phones"][0]["area"] == "11"
        assert "qr_codes" not in payload.body

    def test_two_step_order_and_charge(self) -> None:
        booking = validate_order_request(
            {"amount": "75.90", "payer": {"name": "Ana", "email": "a@x.com"}, "items": [{}]}
        )

        order = build_two_step_order_payload(booking)
        charge = build_charge_payload(booking)

        assert order.body["reference_id"].startswith("ORDER_")
        assert order.body["items"][0]["reference_id"].startswith("ITEM_")
        assert order.body["items"][0]["unit_amount"] == 7590
        assert charge.body["reference_id"].startswith("CHARGE_")
        assert charge.body["amount"]["value"] == 7590
        assert charge.body["payment_method"]["card"] == {"holder": {"name": "Ana"}, "store": False}
        assert order.idempotency_key != charge.idempotency_key

    def test_two_step_order_total_matches_charge(self) -> None:
        booking = validate_order_request(
            {
                "amount": 100,
                "payer": {"name": "Ana", "email": "a@x.com"},
                "items": [{"name": "A"}, {"name": "B", "quantity": 3}],
            }
        )

        order = build_two_step_order_payload(booking)
        charge = build_charge_payload(booking)

        items = order.body["items"]
        order_total = sum(item["unit_amount"] * item["quantity"] for item in items)
        assert len(items) == 1
        assert items[0]["name"] == "A"
        assert items[0]["quantity"] == 1
        assert order_total == charge.body["amount"]["value"] == 10000


class TestMercadoPagoBuilder:
    """Preferência do Checkout Pro."""

    def test_preference_uses_public_url(self) -> None:
        booking = BookingRequest(student_name="Ana", email="ana@x.com", amount=Decimal("50"))

        payload = build_preference_payload(booking, "https://api.dancing.com")

        body = payload.body
        assert body["items"][0]["unit_price"] == 50.0
        assert body["items"][0]["currency_id"] == "BRL"
        assert body["back_urls"]["success"] == "https://api.dancing.com/success"
        assert body["notification_url"] == "https://api.dancing.com/api/mercadopago/webhook"
        assert body["auto_return"] == "approved"
        assert "identification" not in body["payer"]
        assert payload.idempotency_key.startswith("preference-")

    def test_real_tax_id_is_sent_as_identification(self) -> None:
        booking = BookingRequest(
            student_name="Ana", email="ana@x.com", amount=Decimal("50"), tax_id="52998224725"
        )
        payer = build_preference_payload(booking, "https://api").body["payer"]
        assert payer["identification"] == {"type": "CPF", "number": "52998224725"}


class TestStripeBuilder:
    """Checkout Session."""

    def test_session_payload(self) -> None:
        booking = validate_order_request(
            {
                "amount": 120,
                "payer": {"name": "Ana", "email": "a@x.com"},
                "items": [{"name": "Mensal"}],
            }
        )

        payload = build_checkout_session_payload(booking, "https://site/ok", "https://site/cancel")

        body = payload.body
        price_data = body["line_items"][0]["price_data"]
        assert price_data["unit_amount"] == 12000
        assert price_data["currency"] == "brl"
        assert price_data["product_data"]["name"] == "Mensal"
        assert price_data["product_data"]["description"] == "Pagamento para Ana"
        assert body["success_url"] == "https://site/ok?session_id={CHECKOUT_SESSION_ID}"
        assert body["customer_email"] == "a@x.com"
        assert body["payment_intent_data"]["metadata"]["customer_name"] == "Ana"
