"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - token_stores: Token OAuth em arquivo JSON (padrão) e em memória
    - redis_token_store: Token OAuth no Redis com lock distribuído
    - firestore_token_store: Token OAuth em documento Firestore
    - payment_event_log: Últimos eventos de pagamento (memória)
"""

from __future__ import annotations

from app.infra.stores.firestore_token_store import FirestoreTokenStore
from app.infra.stores.payment_event_log import MemoryPaymentEventLog
from app.infra.stores.redis_token_store import RedisTokenStore
from app.infra.stores.token_stores import FileTokenStore, MemoryTokenStore

__all__ = [
    # Firestore
    "FirestoreTokenStore",
    # Local (arquivo/memória)
    "FileTokenStore",
    "MemoryPaymentEventLog",
    "MemoryTokenStore",
    # Redis
    "RedisTokenStore",
]
