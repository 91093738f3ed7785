"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CheckoutError,
    ConfigurationError,
    FirestoreUnavailableError,
    InfrastructureError,
    ReauthorizationRequiredError,
    RedisConnectionError,
    ResponseShapeError,
    TokenStoreError,
    UpstreamError,
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    UpstreamUnparseableError,
    ValidationError,
)

__all__ = [
    "CheckoutError",
    "ConfigurationError",
    "FirestoreUnavailableError",
    "InfrastructureError",
    "ReauthorizationRequiredError",
    "RedisConnectionError",
    "ResponseShapeError",
    "TokenStoreError",
    "UpstreamError",
    "UpstreamRejectedError",
    "UpstreamTimeoutError",
    "UpstreamUnavailableError",
    "UpstreamUnparseableError",
    "ValidationError",
]
