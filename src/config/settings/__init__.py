"""Agregador de settings do serviço de pagamentos.

Re-exporta todas as settings e funções de cada módulo.
Organização por provedor para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    TokenStoreBackend,
    TokenStoreSettings,
    get_base_settings,
    get_token_store_settings,
)

# Provider-specific settings
from config.settings.mercadopago import (
    MERCADOPAGO_API_BASE_URL,
    STATEMENT_DESCRIPTOR,
    MercadoPagoSettings,
    get_mercadopago_settings,
)
from config.settings.pagbank import (
    PAGBANK_PRODUCTION_URL,
    PAGBANK_SANDBOX_URL,
    PagBankSettings,
    get_pagbank_settings,
)
from config.settings.recaptcha import RecaptchaSettings, get_recaptcha_settings
from config.settings.stripe import StripeSettings, get_stripe_settings

__all__ = [
    # Constants
    "MERCADOPAGO_API_BASE_URL",
    "PAGBANK_PRODUCTION_URL",
    "PAGBANK_SANDBOX_URL",
    "STATEMENT_DESCRIPTOR",
    # Base
    "BaseSettings",
    "Environment",
    # Providers
    "MercadoPagoSettings",
    "PagBankSettings",
    "RecaptchaSettings",
    "StripeSettings",
    "TokenStoreBackend",
    "TokenStoreSettings",
    "get_base_settings",
    "get_mercadopago_settings",
    "get_pagbank_settings",
    "get_recaptcha_settings",
    "get_stripe_settings",
    "get_token_store_settings",
]
