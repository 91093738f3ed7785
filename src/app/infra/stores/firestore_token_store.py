"""Firestore Token Store — token OAuth em um único documento.

Usa asyncio.to_thread pois o SDK do Firestore não tem API async nativa.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from app.domain.oauth_token import OAuthToken
from app.protocols.token_store import TokenStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

# Collection e documento padrão
TOKEN_COLLECTION = "oauth_tokens"
TOKEN_DOCUMENT = "mercadopago"


class FirestoreTokenStore(TokenStoreProtocol):
    """Token store usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Collection (TOKEN_STORE_COLLECTION)
        document_id: Documento que guarda o token
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = TOKEN_COLLECTION,
        document_id: str = TOKEN_DOCUMENT,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name
        self._document_id = document_id
        self._lock = asyncio.Lock()

    def _doc(self):  # noqa: ANN202
        return self._db.collection(self._collection).document(self._document_id)

    def _get_sync(self) -> OAuthToken | None:
        try:
            snapshot = self._doc().get()
        except Exception as exc:
            logger.error(
                "token_firestore_read_error",
                extra={"collection": self._collection, "error": str(exc)},
            )
            raise FirestoreUnavailableError("Falha ao ler token no Firestore") from exc

        if not snapshot.exists:
            return None
        try:
            return OAuthToken.model_validate(snapshot.to_dict() or {})
        except PydanticValidationError:
            logger.warning("token_firestore_invalid", extra={"collection": self._collection})
            return None

    def _set_sync(self, token: OAuthToken) -> None:
        try:
            self._doc().set(token.to_storage())
        except Exception as exc:
            logger.error(
                "token_firestore_write_error",
                extra={"collection": self._collection, "error": str(exc)},
            )
            raise FirestoreUnavailableError("Falha ao gravar token no Firestore") from exc

    async def get(self) -> OAuthToken | None:
        async with self._lock:
            return await asyncio.to_thread(self._get_sync)

    async def set(self, token: OAuthToken) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set_sync, token)
        logger.info("oauth_token_saved", extra={"backend": "firestore"})
