"""
Gestion du cycle de vie des jetons OAuth de l'API d'historique (Trakt).

Une requete faite avec un access token expire recoit 401: le refresh token
est alors echange contre une nouvelle paire, persistee dans le credential
store, puis la requete d'origine est relancee une seule fois. Un second 401
est une erreur definitive (pas de boucle de refresh sur un jeton invalide).

Les credentials courants sont passes explicitement et retournes avec la
reponse: le manager ne garde aucun jeton en attribut.

Usage:
    manager = TokenRefreshManager(token_url, client_id, client_secret,
                                  redirect_uri, store, http_client)
    manager.require(credentials)
    response, credentials = await manager.send(credentials, "GET", url)
"""

from typing import Optional

import httpx
from loguru import logger

from src.core.entities.credentials import Credentials
from src.core.errors import (
    AuthExpiredError,
    AuthRefreshError,
    ConfigurationError,
    TransportError,
)
from src.core.ports.credential_store import ICredentialStore


class TokenRefreshManager:
    """
    Envoie des requetes authentifiees et rafraichit le jeton sur 401.

    Attributes:
        service: Nom du fournisseur (logs et erreurs)
    """

    def __init__(
        self,
        token_url: str,
        client_id: Optional[str],
        client_secret: Optional[str],
        redirect_uri: str,
        store: ICredentialStore,
        http_client: httpx.AsyncClient,
        service: str = "trakt",
    ) -> None:
        """
        Initialise le manager.

        Args:
            token_url: Endpoint OAuth (POST JSON)
            client_id: Identifiant de l'application OAuth
            client_secret: Secret de l'application OAuth
            redirect_uri: Redirect URI enregistree (OOB pour un PIN)
            store: Credential store recevant les nouvelles paires
            http_client: Client httpx partage
            service: Nom du fournisseur
        """
        self._token_url = token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._store = store
        self._http = http_client
        self.service = service

    def _missing_client(self) -> list[str]:
        missing = []
        if not self._client_id:
            missing.append("client id")
        if not self._client_secret:
            missing.append("client secret")
        return missing

    def _raise_missing(self, missing: list[str]) -> None:
        raise ConfigurationError(
            f"{self.service} not configured: missing {', '.join(missing)}"
        )

    def require_client(self) -> None:
        """
        Verifie l'identifiant et le secret OAuth, avant toute lecture du store.

        Raises:
            ConfigurationError: Client id ou secret absent
        """
        missing = self._missing_client()
        if missing:
            self._raise_missing(missing)

    def require(self, credentials: Optional[Credentials]) -> Credentials:
        """
        Verifie que tout le necessaire est present avant le premier appel.

        Raises:
            ConfigurationError: Jeton, refresh token, client id ou secret absent
        """
        missing = self._missing_client()
        if credentials is None or not credentials.access_token:
            missing.append("access token")
        if credentials is None or not credentials.refresh_token:
            missing.append("refresh token")
        if missing:
            self._raise_missing(missing)
        return credentials

    async def refresh(self, credentials: Credentials) -> Credentials:
        """
        Echange le refresh token contre une nouvelle paire et la persiste.

        Args:
            credentials: Credentials courants (refresh token utilise)

        Returns:
            Nouveaux credentials, deja ecrits dans le store

        Raises:
            AuthRefreshError: Statut non-2xx ou echec reseau du endpoint OAuth
        """
        logger.info(f"Refreshing {self.service} access token")
        payload = {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "grant_type": "refresh_token",
            "redirect_uri": self._redirect_uri,
            "refresh_token": credentials.refresh_token,
        }
        try:
            response = await self._http.post(self._token_url, json=payload)
        except httpx.HTTPError as e:
            raise AuthRefreshError(f"{self.service} token refresh failed: {e}") from e

        if not response.is_success:
            raise AuthRefreshError(
                f"{self.service} token refresh failed: "
                f"{response.status_code} {response.text[:200]}"
            )

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            refreshed = Credentials.from_token_response(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise AuthRefreshError(
                f"{self.service} token refresh returned an invalid payload"
            ) from e

        await self._store.write(refreshed)
        logger.info(f"{self.service} token refreshed", expires_at=refreshed.expires_at)
        return refreshed

    async def send(
        self,
        credentials: Credentials,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        **kwargs,
    ) -> tuple[httpx.Response, Credentials]:
        """
        Envoie une requete avec le jeton courant, avec au plus un refresh.

        Args:
            credentials: Credentials courants
            method: Methode HTTP
            url: URL cible
            headers: Headers supplementaires
            **kwargs: Arguments passes a httpx.AsyncClient.request()

        Returns:
            (reponse, credentials a utiliser pour les appels suivants).
            Les statuts non-2xx autres que 401 sont laisses a l'appelant.

        Raises:
            AuthExpiredError: 401 apres un refresh reussi
            AuthRefreshError: Le refresh a echoue
            TransportError: Echec reseau
        """
        response = await self._request(credentials, method, url, headers, **kwargs)
        if response.status_code != 401:
            return response, credentials

        logger.debug(f"{self.service} returned 401 on {url}")
        credentials = await self.refresh(credentials)

        response = await self._request(credentials, method, url, headers, **kwargs)
        if response.status_code == 401:
            raise AuthExpiredError(self.service, response.text)
        return response, credentials

    async def _request(
        self,
        credentials: Credentials,
        method: str,
        url: str,
        headers: Optional[dict[str, str]],
        **kwargs,
    ) -> httpx.Response:
        request_headers = dict(headers or {})
        request_headers["Authorization"] = f"Bearer {credentials.access_token}"
        try:
            return await self._http.request(method, url, headers=request_headers, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(self.service, str(e)) from e
