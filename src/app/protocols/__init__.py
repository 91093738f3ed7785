"""Protocolos e contratos do core da aplicação."""

from .event_log import PaymentEventLogProtocol
from .http_client import PaymentHttpClientProtocol
from .oauth_client import OAuthClientProtocol
from .payment_provider import PaymentProviderProtocol
from .recaptcha import RecaptchaVerifierProtocol
from .token_store import TokenStoreProtocol

__all__ = [
    "OAuthClientProtocol",
    "PaymentEventLogProtocol",
    "PaymentHttpClientProtocol",
    "PaymentProviderProtocol",
    "RecaptchaVerifierProtocol",
    "TokenStoreProtocol",
]
