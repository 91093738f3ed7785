"""Testes do CheckoutUseCase (pipeline montar → invocar → normalizar)."""

from __future__ import annotations

import pytest

from api.validators.checkout import validate_simple_payment
from app.infra.stores import MemoryPaymentEventLog
from app.use_cases.checkout import CheckoutUseCase
from utils.errors import UpstreamTimeoutError, ValidationError


def _booking():
    return validate_simple_payment({"nome": "Ana", "email": "ana@x.com", "valor": "50"})


class TestCheckoutUseCase:
    """Testes do CheckoutUseCase."""

    @pytest.mark.asyncio
    async def test_success_runs_every_stage(self, fake_provider) -> None:
        event_log = MemoryPaymentEventLog()
        use_case = CheckoutUseCase(provider=fake_provider, event_log=event_log)

        result = await use_case.execute(_booking())

        assert result.success is True
        assert result.provider_order_id == "ORDE_1"
        assert result.redirect_url == "https://pay/x"
        assert len(fake_provider.built) == 1
        assert len(fake_provider.invoked) == 1
        entry = event_log.recent()[-1]
        assert entry["type"] == "payment_event"
        assert entry["event"] == "checkout_created"

    @pytest.mark.asyncio
    async def test_upstream_error_propagates_and_is_logged(self, fake_provider) -> None:
        fake_provider.error = UpstreamTimeoutError("Tempo esgotado", details="pagbank")
        event_log = MemoryPaymentEventLog()
        use_case = CheckoutUseCase(provider=fake_provider, event_log=event_log)

        with pytest.raises(UpstreamTimeoutError):
            await use_case.execute(_booking())

        entry = event_log.recent()[-1]
        assert entry["type"] == "error"
        assert entry["context"] == "pagbank_checkout"

    @pytest.mark.asyncio
    async def test_without_event_log(self, fake_provider) -> None:
        use_case = CheckoutUseCase(provider=fake_provider)

        result = await use_case.execute(_booking())

        assert use_case.provider_name == "pagbank"
        assert result.success is True

    def test_invalid_input_never_reaches_provider(self, fake_provider) -> None:
        CheckoutUseCase(provider=fake_provider)

        with pytest.raises(ValidationError):
            validate_simple_payment({"nome": "Ana", "valor": "50"})

        assert fake_provider.built == []
        assert fake_provider.invoked == []
