"""Testes dos conectores de provedores (httpx.MockTransport; Stripe com SDK falso)."""

from __future__ import annotations

import json
import time
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest
import stripe

from api.connectors import HttpClient, HttpClientConfig
from api.connectors.mercadopago import MercadoPagoOAuthClient, MercadoPagoProvider
from api.connectors.pagbank import (
    PagBankPaymentLinkProvider,
    PagBankProvider,
    PagBankTwoStepProvider,
)
from api.connectors.recaptcha import RecaptchaClient, RecaptchaVerificationError
from api.connectors.stripe import StripeProvider
from app.domain.booking import BookingRequest
from config.settings import (
    BaseSettings,
    MercadoPagoSettings,
    PagBankSettings,
    RecaptchaSettings,
    StripeSettings,
)
from utils.errors import (
    ConfigurationError,
    ResponseShapeError,
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    UpstreamUnparseableError,
)

BASE = BaseSettings(public_api_url="https://api.dancing.com")


class Recorder:
    """Handler do MockTransport que grava as requisições recebidas."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)

    def client(self) -> HttpClient:
        return HttpClient(HttpClientConfig(component="test"), transport=httpx.MockTransport(self))


def _booking(**overrides) -> BookingRequest:
    data = {"student_name": "Ana", "email": "ana@x.com", "amount": Decimal("50")}
    data.update(overrides)
    return BookingRequest(**data)


class TestMercadoPagoProvider:
    """Preferência do Checkout Pro."""

    @pytest.mark.asyncio
    async def test_creates_preference(self) -> None:
        recorder = Recorder(
            httpx.Response(201, json={"id": "pref-1", "init_point": "https://mp/init"})
        )
        provider = MercadoPagoProvider(
            MercadoPagoSettings(access_token="APP_USR-1"), BASE, recorder.client()
        )

        payload = provider.build_payload(_booking())
        result = provider.normalize_response(await provider.invoke(payload))

        request = recorder.requests[0]
        assert str(request.url) == "https://api.mercadopago.com/checkout/preferences"
        assert request.headers["Authorization"] == "Bearer APP_USR-1"
        assert request.headers["X-Idempotency-Key"] == payload.idempotency_key
        assert result.redirect_url == "https://mp/init"

    @pytest.mark.asyncio
    async def test_missing_token_never_calls_network(self) -> None:
        recorder = Recorder()
        provider = MercadoPagoProvider(MercadoPagoSettings(), BASE, recorder.client())

        with pytest.raises(ConfigurationError):
            await provider.invoke(provider.build_payload(_booking()))
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_rejection_details_from_message(self) -> None:
        recorder = Recorder(httpx.Response(400, json={"message": "invalid items"}))
        provider = MercadoPagoProvider(
            MercadoPagoSettings(access_token="t"), BASE, recorder.client()
        )

        with pytest.raises(UpstreamRejectedError) as exc_info:
            await provider.invoke(provider.build_payload(_booking()))
        assert exc_info.value.message == "Erro ao criar preferência de pagamento"
        assert exc_info.value.details == "invalid items"


class TestPagBankProviders:
    """Variantes PagBank."""

    @pytest.mark.asyncio
    async def test_order_uses_sandbox_and_idempotency(self) -> None:
        recorder = Recorder(
            httpx.Response(
                201,
                json={
                    "id": "ORDE_1",
                    "links": [{"rel": "PAY", "href": "https://pay/x"}],
                    "qr_codes": [{"text": "pix"}],
                },
            )
        )
        provider = PagBankProvider(PagBankSettings(token="pb"), BASE, recorder.client())

        payload = provider.build_payload(_booking())
        result = provider.normalize_response(await provider.invoke(payload))

        request = recorder.requests[0]
        assert str(request.url) == "https://sandbox.api.pagseguro.com/orders"
        assert request.headers["x-idempotency-key"] == payload.idempotency_key
        body = json.loads(request.content)
        assert body["notification_urls"] == ["https://api.dancing.com/api/pagbank/webhook"]
        assert result.provider_order_id == "ORDE_1"
        assert result.qr_code == {"text": "pix"}

    @pytest.mark.asyncio
    async def test_unparseable_body_wins_over_status(self) -> None:
        recorder = Recorder(httpx.Response(500, text="<html>erro</html>"))
        provider = PagBankProvider(PagBankSettings(token="pb"), BASE, recorder.client())

        with pytest.raises(UpstreamUnparseableError) as exc_info:
            await provider.invoke(provider.build_payload(_booking()))
        assert exc_info.value.message == "Erro ao processar resposta do PagBank"

    @pytest.mark.asyncio
    async def test_rejection_uses_error_messages(self) -> None:
        recorder = Recorder(
            httpx.Response(400, json={"error_messages": [{"code": "40002", "description": "x"}]})
        )
        provider = PagBankPaymentLinkProvider(PagBankSettings(token="pb"), BASE, recorder.client())

        with pytest.raises(UpstreamRejectedError) as exc_info:
            await provider.invoke(provider.build_payload(_booking()))
        assert exc_info.value.message == "Erro ao processar pagamento"
        assert exc_info.value.details == [{"code": "40002", "description": "x"}]

    @pytest.mark.asyncio
    async def test_missing_token_is_configuration_error(self) -> None:
        provider = PagBankProvider(PagBankSettings(), BASE, Recorder().client())
        with pytest.raises(ConfigurationError):
            await provider.invoke(provider.build_payload(_booking()))

    @pytest.mark.asyncio
    async def test_two_step_order_then_charge(self) -> None:
        recorder = Recorder(
            httpx.Response(201, json={"id": "ORDE_9"}),
            httpx.Response(
                201,
                json={"id": "CHAR_1", "payment_method": {"payment_url": "https://pay/c"}},
            ),
        )
        provider = PagBankTwoStepProvider(
            PagBankSettings(token="pb", environment="production"), BASE, recorder.client()
        )

        payload = provider.build_payload(_booking())
        result = provider.normalize_response(await provider.invoke(payload))

        order_request, charge_request = recorder.requests
        assert str(order_request.url) == "https://api.pagseguro.com/orders"
        assert str(charge_request.url) == "https://api.pagseguro.com/orders/ORDE_9/charges"
        assert json.loads(order_request.content)["notification_urls"] == [
            "https://api.dancing.com/api/pagseguro/webhook"
        ]
        assert order_request.headers["x-idempotency-key"] != charge_request.headers[
            "x-idempotency-key"
        ]
        assert result.provider_order_id == "ORDE_9"
        assert result.redirect_url == "https://pay/c"

    @pytest.mark.asyncio
    async def test_two_step_order_without_id(self) -> None:
        recorder = Recorder(httpx.Response(201, json={"status": "CREATED"}))
        provider = PagBankTwoStepProvider(PagBankSettings(token="pb"), BASE, recorder.client())

        with pytest.raises(ResponseShapeError):
            await provider.invoke(provider.build_payload(_booking()))
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_fetch_status(self) -> None:
        recorder = Recorder(httpx.Response(200, json={"id": "ORDE_1", "status": "PAID"}))
        provider = PagBankProvider(PagBankSettings(token="pb"), BASE, recorder.client())

        status = await provider.fetch_status("ORDE_1")

        assert recorder.requests[0].method == "GET"
        assert str(recorder.requests[0].url).endswith("/orders/ORDE_1")
        assert status.label == "Pago"


class FakeSessions:
    """Substitui ``stripe.checkout.Session`` gravando os kwargs de ``create``."""

    def __init__(self, result: Any = None, error: Exception | None = None, delay: float = 0) -> None:
        self._result = result or SimpleNamespace(id="cs_1", url="https://stripe/cs_1")
        self._error = error
        self._delay = delay
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self._delay:
            time.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._result


class TestStripeProvider:
    """Checkout Session via SDK."""

    @pytest.mark.asyncio
    async def test_creates_session_with_idempotency_key(self) -> None:
        sessions = FakeSessions()
        provider = StripeProvider(StripeSettings(secret_key="sk_test"), BASE, sessions)

        payload = provider.build_payload(_booking())
        result = provider.normalize_response(await provider.invoke(payload))

        call = sessions.calls[0]
        assert call["api_key"] == "sk_test"
        assert call["idempotency_key"] == payload.idempotency_key
        assert call["mode"] == "payment"
        assert call["line_items"][0]["price_data"]["unit_amount"] == 5000
        assert call["success_url"] == (
            "https://api.dancing.com/admin/stripe/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert result.redirect_url == "https://stripe/cs_1"
        assert result.provider_order_id == "cs_1"

    @pytest.mark.asyncio
    async def test_rejection_keeps_stripe_message(self) -> None:
        error = stripe.InvalidRequestError("card declined", param="payment_method", http_status=402)
        provider = StripeProvider(
            StripeSettings(secret_key="sk_test"), BASE, FakeSessions(error=error)
        )

        with pytest.raises(UpstreamRejectedError) as exc_info:
            await provider.invoke(provider.build_payload(_booking()))
        assert exc_info.value.details == "card declined"
        assert exc_info.value.upstream_status == 402

    @pytest.mark.asyncio
    async def test_connection_error_is_retryable(self) -> None:
        provider = StripeProvider(
            StripeSettings(secret_key="sk_test"),
            BASE,
            FakeSessions(error=stripe.APIConnectionError("network down")),
        )

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await provider.invoke(provider.build_payload(_booking()))
        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_slow_sdk_call_times_out(self) -> None:
        provider = StripeProvider(
            StripeSettings(secret_key="sk_test", request_timeout_seconds=0.01),
            BASE,
            FakeSessions(delay=0.2),
        )

        with pytest.raises(UpstreamTimeoutError):
            await provider.invoke(provider.build_payload(_booking()))

    @pytest.mark.asyncio
    async def test_missing_secret_key(self) -> None:
        sessions = FakeSessions()
        provider = StripeProvider(StripeSettings(), BASE, sessions)

        with pytest.raises(ConfigurationError):
            await provider.invoke(provider.build_payload(_booking()))
        assert sessions.calls == []


class TestMercadoPagoOAuthClient:
    """Troca e renovação de tokens."""

    def test_authorization_url(self) -> None:
        client = MercadoPagoOAuthClient(
            MercadoPagoSettings(client_id="123", redirect_uri="https://app/cb"),
            Recorder().client(),
        )
        url = client.authorization_url()
        assert url.startswith("https://auth.mercadopago.com.br/authorization?")
        assert "client_id=123" in url
        assert "response_type=code" in url
        assert "platform_id=mp" in url
        assert "redirect_uri=https%3A%2F%2Fapp%2Fcb" in url

    @pytest.mark.asyncio
    async def test_refresh_grant(self) -> None:
        recorder = Recorder(
            httpx.Response(
                200,
                json={
                    "access_token": "new",
                    "refresh_token": "r2",
                    "user_id": 7,
                    "expires_in": 3600,
                },
            )
        )
        client = MercadoPagoOAuthClient(
            MercadoPagoSettings(client_id="id", client_secret="secret"), recorder.client()
        )

        token = await client.refresh("r1")

        sent = json.loads(recorder.requests[0].content)
        assert sent["grant_type"] == "refresh_token"
        assert sent["refresh_token"] == "r1"
        assert sent["client_secret"] == "secret"
        assert token.access_token == "new"
        assert token.refresh_token == "r2"

    @pytest.mark.asyncio
    async def test_exchange_rejected(self) -> None:
        recorder = Recorder(httpx.Response(400, json={"message": "invalid_grant"}))
        client = MercadoPagoOAuthClient(
            MercadoPagoSettings(client_id="id", client_secret="secret"), recorder.client()
        )

        with pytest.raises(UpstreamRejectedError) as exc_info:
            await client.exchange_code("bad")
        assert exc_info.value.message == "Erro ao obter token de acesso"


class TestRecaptchaClient:
    """Verificação siteverify."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        recorder = Recorder(httpx.Response(200, json={"success": True, "hostname": "x"}))
        client = RecaptchaClient(RecaptchaSettings(secret_key="rk"), recorder.client())

        details = await client.verify("tok")

        assert details["success"] is True
        assert parse_qs(recorder.requests[0].content.decode()) == {
            "secret": ["rk"],
            "response": ["tok"],
        }

    @pytest.mark.asyncio
    async def test_failure_returns_error_codes(self) -> None:
        recorder = Recorder(
            httpx.Response(200, json={"success": False, "error-codes": ["invalid-input-response"]})
        )
        client = RecaptchaClient(RecaptchaSettings(secret_key="rk"), recorder.client())

        with pytest.raises(RecaptchaVerificationError) as exc_info:
            await client.verify("tok")
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == ["invalid-input-response"]
