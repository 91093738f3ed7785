"""Log em memória dos eventos de pagamento mais recentes.

Guarda as últimas 100 entradas (eventos de pagamento, erros, redirects e
webhooks), já redigidas, para consulta em ``GET /api/mercadopago/logs``.
Sem persistência entre reinícios.
"""

from __future__ import annotations

import threading
from collections import deque
from datetime import UTC, datetime
from typing import Any

from app.protocols.event_log import PaymentEventLogProtocol
from config.logging.redaction import redact

MAX_ENTRIES = 100

# Tipos de entrada aceitos
EVENT_TYPES = frozenset({"payment_event", "error", "redirect", "webhook"})


class MemoryPaymentEventLog(PaymentEventLogProtocol):
    """Buffer circular thread-safe de eventos."""

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        self._entries: deque[dict[str, Any]] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def record(self, event_type: str, data: dict[str, Any]) -> dict[str, Any]:
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Tipo de evento inválido: {event_type}")
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "type": event_type,
            **redact(data),
        }
        with self._lock:
            self._entries.append(entry)
        return entry

    def recent(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Entradas em ordem cronológica (mais antiga primeiro)."""
        with self._lock:
            entries = list(self._entries)
        if limit is not None:
            return entries[-limit:] if limit > 0 else []
        return entries

    def __len__(self) -> int:
        return len(self._entries)
