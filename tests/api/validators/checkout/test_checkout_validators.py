"""Testes dos validators do checkout (corpo HTTP → BookingRequest)."""

from __future__ import annotations

from decimal import Decimal

import pytest

from api.validators.checkout import (
    parse_amount,
    validate_agendamento_checkout,
    validate_order_request,
    validate_payment_status_query,
    validate_preference_request,
    validate_recaptcha_request,
    validate_simple_payment,
)
from app.domain.booking import DEFAULT_TAX_ID
from utils.errors import ValidationError


def _agendamento_body(**overrides):
    body = {
        "agendamento": {
            "nomeAluno": "Ana",
            "email": "ana@x.com",
            "valor": 50,
            "telefone": "(11) 99999-8888",
            "cpf": "123.456.789-09",
            "data": "2024-05-10",
            "horario": "10:00",
            "professorId": "prof-1",
        },
        "paymentMethod": "pix",
        "recaptchaToken": "tok",
    }
    body.update(overrides)
    return body


class TestParseAmount:
    """Testes de parse_amount."""

    @pytest.mark.parametrize("value", [50, "50", "50.00", "50,00"])
    def test_accepts_numbers_and_strings(self, value) -> None:
        assert parse_amount(value, "valor") == Decimal("50")

    @pytest.mark.parametrize("value", [0, -1, "abc", None, True, "NaN", ""])
    def test_rejects_invalid_values(self, value) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_amount(value, "valor")
        assert exc_info.value.message == "Valor inválido"
        assert exc_info.value.fields == ["valor"]

    @pytest.mark.parametrize(
        "value", ["0.001", "0.004", "1e-30", "1e30", "1000000.01", "Infinity", float("inf")]
    )
    def test_rejects_amounts_outside_chargeable_range(self, value) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_amount(value, "valor")
        assert exc_info.value.message == "Valor inválido"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("0.005", Decimal("0.005")), ("0.01", Decimal("0.01")), ("1000000", Decimal("1000000"))],
    )
    def test_accepts_range_edges(self, value, expected) -> None:
        assert parse_amount(value, "valor") == expected


class TestValidateSimplePayment:
    """Testes de validate_simple_payment (PagBank create-payment)."""

    def test_valid_body_builds_single_item(self) -> None:
        booking = validate_simple_payment({"nome": "Ana", "email": "ana@x.com", "valor": 50})

        assert booking.student_name == "Ana"
        assert booking.amount == Decimal("50")
        assert booking.line_items[0].name == "Aula de Patinação"
        assert booking.line_items[0].unit_amount == Decimal("50")
        assert booking.tax_id == DEFAULT_TAX_ID

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "ana@x.com", "valor": 50},
            {"nome": "Ana", "valor": 50},
            {"nome": "Ana", "email": "", "valor": 50},
            {"nome": "Ana", "email": "ana@x.com"},
        ],
    )
    def test_missing_fields_rejected(self, body) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_simple_payment(body)
        assert exc_info.value.message == "Dados inválidos"
        assert exc_info.value.details == "Nome, email e valor são obrigatórios"
        assert exc_info.value.status_code == 400

    def test_non_object_body_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_simple_payment(["nome"])


class TestValidateAgendamentoCheckout:
    """Testes de validate_agendamento_checkout (PagBank checkout)."""

    def test_pix_checkout(self) -> None:
        checkout = validate_agendamento_checkout(_agendamento_body())

        booking = checkout.booking
        assert checkout.recaptcha_token == "tok"
        assert booking.payment_method == "pix"
        assert booking.card is None
        assert booking.phone == "11999998888"
        assert booking.tax_id == "12345678909"
        assert booking.scheduled_date == "2024-05-10"
        assert booking.instructor_id == "prof-1"

    def test_credit_card_with_card_data(self) -> None:
        body = _agendamento_body(
            paymentMethod="credit_card",
            cardData={
                "number": "4111 1111 1111 1111",
                "expMonth": "12",
                "expYear": "2030",
                "securityCode": "123",
                "holderName": "ANA",
            },
        )

        booking = validate_agendamento_checkout(body).booking

        assert booking.is_card_payment is True
        assert booking.card is not None
        assert booking.card.number == "4111111111111111"

    def test_credit_card_without_card_data_falls_back_to_pix(self) -> None:
        booking = validate_agendamento_checkout(
            _agendamento_body(paymentMethod="credit_card")
        ).booking
        assert booking.payment_method == "pix"

    def test_incomplete_card_rejected(self) -> None:
        body = _agendamento_body(paymentMethod="credit_card", cardData={"number": "4111"})
        with pytest.raises(ValidationError) as exc_info:
            validate_agendamento_checkout(body)
        assert exc_info.value.message == "Dados do cartão inválidos"

    def test_missing_recaptcha_rejected(self) -> None:
        body = _agendamento_body()
        del body["recaptchaToken"]
        with pytest.raises(ValidationError) as exc_info:
            validate_agendamento_checkout(body)
        assert exc_info.value.message == "Dados incompletos"
        assert exc_info.value.fields == ["recaptchaToken"]

    def test_unknown_payment_method_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_agendamento_checkout(_agendamento_body(paymentMethod="boleto"))
        assert exc_info.value.message == "Método de pagamento inválido"

    def test_non_positive_amount_rejected(self) -> None:
        body = _agendamento_body()
        body["agendamento"]["valor"] = 0
        with pytest.raises(ValidationError) as exc_info:
            validate_agendamento_checkout(body)
        assert exc_info.value.message == "Valor inválido"


class TestValidatePreferenceRequest:
    """Testes de validate_preference_request (Mercado Pago)."""

    def test_sums_items(self) -> None:
        booking = validate_preference_request(
            {
                "items": [
                    {"title": "Aula", "quantity": 2, "unit_price": 50},
                    {"title": "Patins", "unit_price": "10.50"},
                ],
                "payer": {"email": "ana@x.com", "name": "Ana"},
            }
        )
        assert booking.amount == Decimal("110.50")
        assert [item.name for item in booking.items] == ["Aula", "Patins"]

    @pytest.mark.parametrize("items", [None, [], "x"])
    def test_missing_items_rejected(self, items) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_preference_request({"items": items, "payer": {"email": "a@b.com"}})
        assert exc_info.value.message == "Items inválidos"
        assert exc_info.value.details == "O array de items é obrigatório e não pode estar vazio"

    def test_missing_payer_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_preference_request({"items": [{"title": "Aula", "unit_price": 10}]})
        assert exc_info.value.message == "Dados do pagador inválidos"

    def test_total_above_limit_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_preference_request(
                {
                    "items": [{"title": "Aula", "quantity": 10_000, "unit_price": 1000}],
                    "payer": {"email": "a@x.com"},
                }
            )
        assert exc_info.value.message == "Valor inválido"
        assert exc_info.value.fields == ["items"]


class TestValidateOrderRequest:
    """Testes de validate_order_request (PagSeguro e Stripe)."""

    def test_valid_body(self) -> None:
        booking = validate_order_request(
            {
                "amount": "75.90",
                "payer": {"name": "Ana", "email": "ana@x.com", "tax_id": "529.982.247-25"},
                "items": [{"name": "Aula em grupo"}],
            }
        )
        assert booking.amount == Decimal("75.90")
        assert booking.tax_id == "52998224725"
        assert booking.items[0].unit_amount == Decimal("75.90")

    def test_item_without_name_gets_default(self) -> None:
        booking = validate_order_request(
            {"amount": 10, "payer": {"name": "Ana", "email": "a@x.com"}, "items": [{}]}
        )
        assert booking.items[0].name == "Pagamento Dancing Patinação"

    @pytest.mark.parametrize(
        "body",
        [
            {"payer": {"name": "Ana", "email": "a@x.com"}, "items": [{}]},
            {"amount": 10, "items": [{}]},
            {"amount": 10, "payer": {"name": "Ana", "email": "a@x.com"}, "items": []},
            {"amount": 10, "payer": {"email": "a@x.com"}, "items": [{}]},
        ],
    )
    def test_incomplete_body_rejected(self, body) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_order_request(body)
        assert exc_info.value.message == "Dados incompletos"

    @pytest.mark.parametrize(
        "quantity", ["Infinity", float("inf"), "NaN", "1e400", "1.5", 0, -2, True, "abc"]
    )
    def test_invalid_quantity_rejected(self, quantity) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_order_request(
                {
                    "amount": 10,
                    "payer": {"name": "Ana", "email": "a@x.com"},
                    "items": [{"name": "A", "quantity": quantity}],
                }
            )
        assert exc_info.value.message == "Quantidade inválida"
        assert exc_info.value.fields == ["items[0].quantity"]

    def test_integral_quantity_string_accepted(self) -> None:
        booking = validate_order_request(
            {
                "amount": 10,
                "payer": {"name": "Ana", "email": "a@x.com"},
                "items": [{"name": "A", "quantity": "2.0"}],
            }
        )
        assert booking.items[0].quantity == 2


class TestSmallValidators:
    """Testes de orderId e recaptchaToken."""

    def test_payment_status_requires_order_id(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_payment_status_query(None)
        assert exc_info.value.message == "orderId é obrigatório"
        assert validate_payment_status_query(" ORDE_1 ") == "ORDE_1"

    def test_recaptcha_requires_token(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_recaptcha_request({})
        assert exc_info.value.message == "Token do reCAPTCHA é obrigatório"
        assert validate_recaptcha_request({"recaptchaToken": "abc"}) == "abc"
