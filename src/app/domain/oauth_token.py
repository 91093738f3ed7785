"""Token OAuth do Mercado Pago no formato persistido em ``mp_token.json``."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class OAuthToken(BaseModel):
    """Credenciais obtidas pelo fluxo authorization_code/refresh_token."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(..., min_length=1, description="Token de acesso.")
    refresh_token: str = Field(default="", description="Token de renovação.")
    user_id: str | int | None = Field(default=None, description="ID do vendedor.")
    expires_in: int | None = Field(default=None, description="Validade em segundos.")
    created_at: str = Field(
        default_factory=_utcnow_iso,
        description="Momento da emissão (ISO 8601).",
    )

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    def is_expired(self, now: datetime | None = None) -> bool:
        """True se ``created_at + expires_in`` já passou (sem expires_in: False)."""
        if not self.expires_in:
            return False
        try:
            created = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return True
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        current = now or datetime.now(timezone.utc)
        return current >= created + timedelta(seconds=self.expires_in)

    @classmethod
    def from_provider_response(cls, data: dict[str, Any]) -> OAuthToken:
        """Cria token a partir da resposta de ``/oauth/token``."""
        return cls(
            access_token=data.get("access_token") or "",
            refresh_token=data.get("refresh_token") or "",
            user_id=data.get("user_id"),
            expires_in=data.get("expires_in"),
        )

    def to_storage(self) -> dict[str, Any]:
        """Formato gravado em disco/Redis/Firestore."""
        return self.model_dump()


__all__ = ["OAuthToken"]
