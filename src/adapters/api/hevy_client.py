"""
Client Hevy (suivi d'entrainement).

Authentification par header api-key. Les dossiers et routines sont pagines
(page/pageSize, page_count dans le corps).

Usage:
    client = HevyClient(api_key="xxx")
    folders = await client.get_routine_folders()
    await client.close()
"""

from typing import Any, Optional

import httpx

from src.adapters.api.pagination import fetch_all_pages
from src.core.errors import TransportError, UpstreamError


class HevyClient:
    """
    Client API Hevy v1.

    Attributes:
        BASE_URL: URL de base de l'API
        PAGE_SIZE: Taille de page pour dossiers et routines
        MAX_WORKOUTS_PAGE_SIZE: Taille maximale acceptee par /workouts
    """

    BASE_URL = "https://api.hevyapp.com/v1"
    PAGE_SIZE = 10
    MAX_WORKOUTS_PAGE_SIZE = 10
    SERVICE = "hevy"

    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Accept": "application/json", "api-key": self._api_key or ""},
                timeout=30.0,
            )
        return self._client

    async def get_routine_folders(self) -> list[dict[str, Any]]:
        """Tous les dossiers de routines, toutes pages confondues."""
        return await fetch_all_pages(
            self._get_client(),
            "/routine_folders",
            "routine_folders",
            page_size=self.PAGE_SIZE,
            service=self.SERVICE,
        )

    async def get_routines(self) -> list[dict[str, Any]]:
        """Toutes les routines, tous dossiers confondus."""
        return await fetch_all_pages(
            self._get_client(),
            "/routines",
            "routines",
            page_size=self.PAGE_SIZE,
            service=self.SERVICE,
        )

    async def get_workout_count(self) -> int:
        data = await self._get_json("/workouts/count")
        return int(data.get("workout_count") or 0)

    async def get_recent_workouts(self, limit: int = 5) -> list[dict[str, Any]]:
        """Les derniers entrainements (premiere page uniquement)."""
        page_size = max(1, min(limit, self.MAX_WORKOUTS_PAGE_SIZE))
        data = await self._get_json(
            "/workouts", params={"page": 1, "pageSize": page_size}
        )
        return (data.get("workouts") or [])[:limit]

    async def _get_json(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        try:
            response = await self._get_client().get(path, params=params)
        except httpx.HTTPError as e:
            raise TransportError(self.SERVICE, str(e)) from e
        if not response.is_success:
            raise UpstreamError(self.SERVICE, response.status_code, response.text)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(self.SERVICE, f"invalid JSON on {path}") from e

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
