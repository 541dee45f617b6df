"""
Jetons OAuth persistes pour l'API de l'historique de visionnage (Trakt).
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional


@dataclass
class Credentials:
    """
    Paire de jetons OAuth et ses metadonnees.

    La copie canonique vit dans le credential store. Une copie de travail
    circule pendant une agregation et est remplacee apres chaque refresh.

    Attributes:
        access_token: Jeton Bearer envoye a l'API
        refresh_token: Jeton echange contre une nouvelle paire
        expires_at: Date d'expiration ISO-8601 (UTC), si connue
        token_type: Type de jeton ("bearer")
        scope: Scope OAuth accorde
    """

    access_token: str = ""
    refresh_token: str = ""
    expires_at: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credentials":
        return cls(
            access_token=str(data.get("access_token") or "").strip(),
            refresh_token=str(data.get("refresh_token") or "").strip(),
            expires_at=data.get("expires_at"),
            token_type=data.get("token_type"),
            scope=data.get("scope"),
        )

    @classmethod
    def from_token_response(
        cls, payload: dict[str, Any], now: Optional[datetime] = None
    ) -> "Credentials":
        """
        Construit les credentials depuis la reponse du endpoint /oauth/token.

        Args:
            payload: JSON {access_token, refresh_token, expires_in, token_type, scope}
            now: Instant de reference (UTC par defaut)
        """
        now = now or datetime.now(tz=timezone.utc)
        expires_in = payload.get("expires_in")
        expires_at = (
            (now + timedelta(seconds=int(expires_in))).isoformat()
            if expires_in is not None
            else None
        )
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload["refresh_token"],
            expires_at=expires_at,
            token_type=payload.get("token_type"),
            scope=payload.get("scope"),
        )
