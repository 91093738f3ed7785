"""Configuração do pytest para o serviço de pagamentos Dancing."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.domain.oauth_token import OAuthToken  # noqa: E402
from app.domain.payment import PaymentPayload, PaymentResult, ProviderResponse  # noqa: E402


class FakePaymentProvider:
    """Provedor sem IO que conta as chamadas de cada etapa."""

    name = "pagbank"

    def __init__(
        self,
        response: ProviderResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response or ProviderResponse(
            status_code=201,
            text="{}",
            data={"id": "ORDE_1", "links": [{"rel": "payment", "href": "https://pay/x"}]},
        )
        self.error = error
        self.built: list[object] = []
        self.invoked: list[PaymentPayload] = []

    def build_payload(self, booking):
        self.built.append(booking)
        return PaymentPayload(
            provider="pagbank",
            body={"amount": str(booking.amount)},
            idempotency_key="k",
        )

    async def invoke(self, payload: PaymentPayload) -> ProviderResponse:
        self.invoked.append(payload)
        if self.error is not None:
            raise self.error
        return self.response

    def normalize_response(self, response: ProviderResponse) -> PaymentResult:
        data = response.data or {}
        return PaymentResult(
            success=True,
            provider="pagbank",
            redirect_url="https://pay/x",
            provider_order_id=data.get("id"),
            raw_provider_response=data,
        )


class FakeOAuthClient:
    """Cliente OAuth em memória com contadores de chamada."""

    def __init__(self, refreshed: OAuthToken | None = None) -> None:
        self.refreshed = refreshed or OAuthToken(
            access_token="new-access", refresh_token="new-refresh"
        )
        self.refresh_calls: list[str] = []
        self.exchange_calls: list[str] = []

    def authorization_url(self) -> str:
        return "https://auth.mercadopago.com.br/authorization?client_id=abc"

    async def exchange_code(self, code: str) -> OAuthToken:
        self.exchange_calls.append(code)
        return OAuthToken(access_token=f"access-{code}", refresh_token="refresh-1", user_id=42)

    async def refresh(self, refresh_token: str) -> OAuthToken:
        self.refresh_calls.append(refresh_token)
        return self.refreshed


@pytest.fixture
def fake_provider() -> FakePaymentProvider:
    return FakePaymentProvider()


@pytest.fixture
def fake_oauth_client() -> FakeOAuthClient:
    return FakeOAuthClient()
