"""
Client Trakt (historique de visionnage).

Chaque appel passe par le TokenRefreshManager et retourne, en plus des
donnees, les credentials a utiliser pour l'appel suivant (eventuellement
rafraichis).

Usage:
    history, credentials = await client.get_history(credentials, limit=10)
    stats, credentials = await client.get_stats(credentials)
"""

from typing import Any, Optional

import httpx

from src.adapters.api.token_refresh import TokenRefreshManager
from src.core.entities.credentials import Credentials
from src.core.errors import TransportError, UpstreamError


class TraktClient:
    """
    Client API Trakt v2.

    Attributes:
        API_URL: URL de base de l'API
        TOKEN_URL: Endpoint OAuth d'echange de jetons
    """

    API_URL = "https://api.trakt.tv"
    TOKEN_URL = "https://api.trakt.tv/oauth/token"
    API_VERSION = "2"
    SERVICE = "trakt"

    def __init__(self, client_id: Optional[str], token_manager: TokenRefreshManager) -> None:
        self._client_id = client_id
        self._tokens = token_manager

    @property
    def token_manager(self) -> TokenRefreshManager:
        return self._tokens

    @staticmethod
    def create_http_client() -> httpx.AsyncClient:
        """Client HTTP partage entre TraktClient et son TokenRefreshManager."""
        return httpx.AsyncClient(base_url=TraktClient.API_URL, timeout=30.0)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "trakt-api-version": self.API_VERSION,
            "trakt-api-key": self._client_id or "",
        }

    async def get_history(
        self, credentials: Credentials, limit: int = 10
    ) -> tuple[list[dict[str, Any]], Credentials]:
        """Derniers films et episodes vus, du plus recent au plus ancien."""
        data, credentials = await self._get(
            credentials, "/users/me/history", params={"page": 1, "limit": limit}
        )
        return list(data or []), credentials

    async def get_stats(self, credentials: Credentials) -> tuple[dict[str, Any], Credentials]:
        """Statistiques globales du compte."""
        data, credentials = await self._get(credentials, "/users/me/stats")
        return dict(data or {}), credentials

    async def _get(
        self,
        credentials: Credentials,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> tuple[Any, Credentials]:
        response, credentials = await self._tokens.send(
            credentials, "GET", path, headers=self._headers(), params=params
        )
        if not response.is_success:
            raise UpstreamError(self.SERVICE, response.status_code, response.text)
        try:
            return response.json(), credentials
        except ValueError as e:
            raise TransportError(self.SERVICE, f"invalid JSON on {path}") from e
