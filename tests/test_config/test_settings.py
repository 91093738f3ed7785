"""Testes das settings (carga por env e validação)."""

from __future__ import annotations

import pytest

from config.settings import (
    PAGBANK_PRODUCTION_URL,
    PAGBANK_SANDBOX_URL,
    BaseSettings,
    MercadoPagoSettings,
    PagBankSettings,
    RecaptchaSettings,
    StripeSettings,
    TokenStoreSettings,
    get_base_settings,
    get_pagbank_settings,
    get_stripe_settings,
    get_token_store_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    getters = (
        get_base_settings,
        get_pagbank_settings,
        get_stripe_settings,
        get_token_store_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()


class TestBaseSettings:
    """Testes de BaseSettings."""

    def test_defaults_are_valid_in_development(self) -> None:
        assert BaseSettings().validate() == []

    def test_public_url_required_outside_development(self) -> None:
        errors = BaseSettings(environment="production").validate()
        assert "NEXT_PUBLIC_API_URL deve ser configurada fora de development" in errors

    def test_invalid_port(self) -> None:
        assert "PORT inválida: 0" in BaseSettings(port=0).validate()

    def test_loads_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://api.dancing.com.br/")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.com, https://b.com")

        settings = get_base_settings()

        assert settings.is_production
        assert settings.api_base_url == "https://api.dancing.com.br"
        assert settings.allowed_origins == ("https://a.com", "https://b.com")


class TestTokenStoreSettings:
    """Testes de TokenStoreSettings."""

    def test_default_backend_is_file(self, monkeypatch) -> None:
        monkeypatch.delenv("TOKEN_STORE_BACKEND", raising=False)
        settings = get_token_store_settings()
        assert settings.backend == "file"
        assert settings.file_path == "mp_token.json"

    def test_unknown_backend_falls_back_to_file(self, monkeypatch) -> None:
        monkeypatch.setenv("TOKEN_STORE_BACKEND", "postgres")
        assert get_token_store_settings().backend == "file"

    def test_memory_forbidden_outside_development(self) -> None:
        errors = TokenStoreSettings(backend="memory").validate(
            BaseSettings(environment="staging")
        )
        assert errors == ["TOKEN_STORE_BACKEND=memory proibido em staging/production"]

    def test_redis_requires_url(self) -> None:
        errors = TokenStoreSettings(backend="redis").validate(BaseSettings())
        assert errors == ["REDIS_URL obrigatório para TOKEN_STORE_BACKEND=redis"]
        assert TokenStoreSettings(backend="redis").validate(
            BaseSettings(redis_url="redis://localhost:6379/0")
        ) == []


class TestProviderSettings:
    """Testes das settings de provedores."""

    def test_pagbank_urls_follow_environment(self) -> None:
        sandbox = PagBankSettings(token="t")
        production = PagBankSettings(token="t", environment="production")

        assert sandbox.orders_url == f"{PAGBANK_SANDBOX_URL}/orders"
        assert production.order_url("ORDE_1") == f"{PAGBANK_PRODUCTION_URL}/orders/ORDE_1"
        assert production.charges_url("ORDE_1").endswith("/orders/ORDE_1/charges")

    def test_pagbank_env_loading(self, monkeypatch) -> None:
        monkeypatch.setenv("PAGBANK_ENV", "production")
        monkeypatch.setenv("PAGBANK_TOKEN", "tok")

        settings = get_pagbank_settings()

        assert settings.is_production
        assert settings.token == "tok"
        assert settings.validate() == []

    def test_pagbank_token_required(self) -> None:
        assert PagBankSettings().validate() == ["PAGBANK_TOKEN não configurado"]

    def test_mercadopago_requires_credentials(self) -> None:
        errors = MercadoPagoSettings().validate()
        assert "MERCADOPAGO_ACCESS_TOKEN não configurado" in errors
        assert "MERCADOPAGO_CLIENT_SECRET não configurado" in errors
        assert MercadoPagoSettings().preferences_url.endswith("/checkout/preferences")

    def test_stripe_env_loading(self, monkeypatch) -> None:
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_1")
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_1")

        settings = get_stripe_settings()

        assert settings.validate() == []
        assert settings.webhook_secret == "whsec_1"
        assert settings.request_timeout_seconds == 15.0

    def test_stripe_invalid_timeout(self) -> None:
        errors = StripeSettings(secret_key="sk", request_timeout_seconds=0).validate()
        assert errors == ["STRIPE_REQUEST_TIMEOUT_SECONDS deve ser > 0"]

    def test_recaptcha_requires_secret(self) -> None:
        assert RecaptchaSettings().validate() == ["RECAPTCHA_SECRET_KEY não configurado"]
