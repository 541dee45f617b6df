"""
Client TMDB pour la recherche des posters.

Sert de fonction de recherche au LookupBatcher: une cle ("movie", id),
("show", id) ou ("season", id, numero) donne l'URL complete du poster, ou
None si TMDB n'en a pas. Les 429 sont relances avec backoff (retry.py).

Usage:
    client = TMDBPosterClient(api_key="your_key")
    url = await client.get_poster(("season", 1399, 2))
    await client.close()
"""

from typing import Hashable, Optional

import httpx
from loguru import logger

from src.adapters.api.retry import request_with_retry


class TMDBPosterClient:
    """
    Client API TMDB v3 limite aux posters.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base des images (largeur w342)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w342"

    def __init__(self, api_key: Optional[str]) -> None:
        """
        Args:
            api_key: Cle API v3 ou Read Access Token v4
        """
        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : parametre api_key
        - Read Access Token v4 (long JWT) : header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key or "") > 40

            headers = {"Accept": "application/json"}
            params = {}
            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key or ""

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def get_poster(self, key: tuple[Hashable, ...]) -> Optional[str]:
        """
        Recupere l'URL du poster pour une cle d'enrichissement.

        Une saison sans poster retombe sur le poster de la serie.

        Args:
            key: ("movie", tmdb_id), ("show", tmdb_id) ou ("season", tmdb_id, season)

        Returns:
            URL complete du poster, ou None

        Raises:
            httpx.HTTPStatusError: Statut non-2xx autre que 404
            RateLimitError: 429 persistant
        """
        kind = key[0]
        if kind == "movie":
            return await self._poster_from(f"/movie/{key[1]}")
        if kind == "show":
            return await self._poster_from(f"/tv/{key[1]}")
        if kind == "season":
            poster = await self._poster_from(f"/tv/{key[1]}/season/{key[2]}")
            if poster is None:
                poster = await self._poster_from(f"/tv/{key[1]}")
            return poster
        logger.debug(f"Unknown poster kind: {kind}")
        return None

    async def _poster_from(self, path: str) -> Optional[str]:
        try:
            response = await request_with_retry(self._get_client(), "GET", path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        poster_path = response.json().get("poster_path")
        return f"{self.TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
