"""Protocolo do log de eventos de pagamento (consultado em /logs)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class PaymentEventLogProtocol(ABC):
    """Registro append-only com leitura dos eventos mais recentes."""

    @abstractmethod
    def record(self, event_type: str, data: dict[str, Any]) -> dict[str, Any]: ...

    @abstractmethod
    def recent(self, limit: int | None = None) -> list[dict[str, Any]]: ...
