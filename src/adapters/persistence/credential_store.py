"""
Stockage persistant des credentials OAuth.

Deux implementations de ICredentialStore:
- DiskCredentialStore: diskcache dans un repertoire local. Chaque ecriture
  est une transaction SQLite sur une cle unique, donc atomique.
- DirectusCredentialStore: collection singleton d'un CMS Directus, lue en
  GET et mise a jour en PATCH avec un jeton statique.
"""

import asyncio
from functools import partial
from typing import Optional

import httpx
from diskcache import Cache
from loguru import logger

from src.core.entities.credentials import Credentials
from src.core.errors import TransportError, UpstreamError
from src.core.ports.credential_store import ICredentialStore


class DiskCredentialStore(ICredentialStore):
    """
    Credential store local base sur diskcache.

    Les operations bloquantes passent par run_in_executor pour ne pas
    bloquer la boucle d'evenements.

    Example:
        store = DiskCredentialStore(directory=".cache/credentials")
        await store.write(credentials)
        current = await store.read()
    """

    KEY = "credentials"

    def __init__(self, directory: str = ".cache/credentials") -> None:
        """
        Args:
            directory: Repertoire du stockage (cree si inexistant)
        """
        self._cache = Cache(directory)

    async def read(self) -> Optional[Credentials]:
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._cache.get, self.KEY)
        return Credentials.from_dict(data) if data else None

    async def write(self, credentials: Credentials) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, self.KEY, credentials.to_dict())
        )
        logger.debug("Credentials written to disk store")

    async def close(self) -> None:
        """Ferme la connexion au stockage."""
        self._cache.close()


class DirectusCredentialStore(ICredentialStore):
    """
    Credential store distant: singleton Directus.

    Attributes:
        SERVICE: Nom utilise dans les erreurs
    """

    SERVICE = "directus"

    def __init__(
        self,
        base_url: str,
        token: str,
        collection: str = "trakt_tokens",
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            base_url: URL de l'instance Directus
            token: Jeton d'acces statique
            collection: Nom de la collection singleton
            http_client: Client httpx (cree a la demande si absent)
        """
        self._url = f"{base_url.rstrip('/')}/items/{collection}"
        self._token = token
        self._client = http_client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=30.0)
        return self._client

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    async def read(self) -> Optional[Credentials]:
        try:
            response = await self._get_client().get(self._url, headers=self._headers())
        except httpx.HTTPError as e:
            raise TransportError(self.SERVICE, str(e)) from e
        if not response.is_success:
            raise UpstreamError(self.SERVICE, response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(self.SERVICE, f"invalid JSON from {self._url}") from e
        if not isinstance(body, dict):
            raise TransportError(self.SERVICE, f"unexpected body from {self._url}")

        data = body.get("data")
        if data and not isinstance(data, dict):
            raise TransportError(self.SERVICE, "credentials singleton is not an object")
        return Credentials.from_dict(data) if data else None

    async def write(self, credentials: Credentials) -> None:
        try:
            response = await self._get_client().patch(
                self._url, headers=self._headers(), json=credentials.to_dict()
            )
        except httpx.HTTPError as e:
            raise TransportError(self.SERVICE, str(e)) from e
        if not response.is_success:
            raise UpstreamError(self.SERVICE, response.status_code, response.text)
        logger.debug("Credentials written to Directus")

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
