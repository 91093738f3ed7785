"""Conector PagBank/PagSeguro (API de Orders)."""

from api.connectors.pagbank.provider import (
    PagBankPaymentLinkProvider,
    PagBankProvider,
    PagBankTwoStepProvider,
)

__all__ = [
    "PagBankPaymentLinkProvider",
    "PagBankProvider",
    "PagBankTwoStepProvider",
]
