"""Token stores locais — arquivo JSON e memória.

``FileTokenStore`` é o backend padrão e grava ``mp_token.json`` de forma
atômica (arquivo temporário no mesmo diretório + ``os.replace``), para que
um leitor concorrente nunca veja um arquivo parcialmente escrito.

``MemoryTokenStore`` é apenas para desenvolvimento e testes.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from app.domain.oauth_token import OAuthToken
from app.protocols.token_store import TokenStoreProtocol
from utils.errors import TokenStoreError

logger = logging.getLogger(__name__)


class MemoryTokenStore(TokenStoreProtocol):
    """Token store em memória — apenas para dev/test."""

    def __init__(self, token: OAuthToken | None = None) -> None:
        self._token = token
        self._lock = asyncio.Lock()

    async def get(self) -> OAuthToken | None:
        async with self._lock:
            return self._token

    async def set(self, token: OAuthToken) -> None:
        async with self._lock:
            self._token = token


class FileTokenStore(TokenStoreProtocol):
    """Token store em arquivo JSON com escrita atômica.

    Args:
        path: Caminho do arquivo (default: mp_token.json no diretório atual)
    """

    def __init__(self, path: str | Path = "mp_token.json") -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_sync(self) -> OAuthToken | None:
        if not self._path.exists():
            return None
        try:
            with self._path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError:
            logger.warning("token_file_corrupted", extra={"path": str(self._path)})
            return None
        except OSError as exc:
            raise TokenStoreError(f"Falha ao ler token: {exc}") from exc

        if not isinstance(data, dict) or not data.get("access_token"):
            return None
        try:
            return OAuthToken.model_validate(data)
        except PydanticValidationError:
            logger.warning("token_file_invalid", extra={"path": str(self._path)})
            return None

    def _write_sync(self, token: OAuthToken) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(token.to_storage(), handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise TokenStoreError(f"Falha ao gravar token: {exc}") from exc

    async def get(self) -> OAuthToken | None:
        async with self._lock:
            return await asyncio.to_thread(self._read_sync)

    async def set(self, token: OAuthToken) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write_sync, token)
        logger.info("oauth_token_saved", extra={"backend": "file", "path": str(self._path)})
