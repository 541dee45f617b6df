"""
Client Last.fm (scrobbles).

L'API 2.0 expose toutes ses methodes sur un seul endpoint (?method=...).
Les erreurs applicatives arrivent sous forme de JSON {"error": code,
"message": ...}, parfois avec un statut 200.
"""

from typing import Any, Optional

import httpx

from src.core.errors import NotFoundError, TransportError, UpstreamError

# Code d'erreur Last.fm "Invalid resource specified" (utilisateur inconnu)
LASTFM_USER_NOT_FOUND = 6


class LastFmClient:
    """
    Client API Last.fm 2.0.

    Attributes:
        BASE_URL: Endpoint unique de l'API
    """

    BASE_URL = "https://ws.audioscrobbler.com/2.0/"
    SERVICE = "lastfm"

    def __init__(self, api_key: Optional[str], username: Optional[str]) -> None:
        self._api_key = api_key
        self._username = username
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._username)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
        return self._client

    async def get_recent_tracks(self, limit: int = 10) -> list[dict[str, Any]]:
        """
        Derniers titres ecoutes, le titre en cours d'ecoute inclus.

        Note: Last.fm ajoute le titre en cours en tete, la liste peut donc
        contenir limit + 1 elements; elle est tronquee a limit.
        """
        data = await self._call("user.getrecenttracks", limit=limit, extended=0)
        tracks = (data.get("recenttracks") or {}).get("track") or []
        # Un seul resultat est renvoye comme objet et non comme liste
        if isinstance(tracks, dict):
            tracks = [tracks]
        return tracks[:limit]

    async def get_user_info(self) -> dict[str, Any]:
        data = await self._call("user.getinfo")
        return data.get("user") or {}

    async def _call(self, method: str, **params: Any) -> dict[str, Any]:
        query = {
            "method": method,
            "user": self._username,
            "api_key": self._api_key,
            "format": "json",
            **params,
        }
        try:
            response = await self._get_client().get(self.BASE_URL, params=query)
        except httpx.HTTPError as e:
            raise TransportError(self.SERVICE, str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and "error" in data:
            if data["error"] == LASTFM_USER_NOT_FOUND:
                raise NotFoundError(f"Last.fm user '{self._username}' not found")
            raise UpstreamError(
                self.SERVICE,
                response.status_code,
                message=f"lastfm API error {data['error']}: {data.get('message', '')}",
            )

        if not response.is_success:
            raise UpstreamError(self.SERVICE, response.status_code, response.text)
        if data is None:
            raise TransportError(self.SERVICE, f"invalid JSON for {method}")
        return data

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
