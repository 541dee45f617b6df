"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web:
caches TTL (une instance par ressource), credential store, clients API et
services d'agregation.
"""

import httpx
from dependency_injector import containers, providers

from .adapters.api.cache import TTLCache
from .adapters.api.hevy_client import HevyClient
from .adapters.api.lastfm_client import LastFmClient
from .adapters.api.tmdb_client import TMDBPosterClient
from .adapters.api.token_refresh import TokenRefreshManager
from .adapters.api.trakt_client import TraktClient
from .adapters.persistence.credential_store import (
    DirectusCredentialStore,
    DiskCredentialStore,
)
from .config import Settings
from .core.ports.credential_store import ICredentialStore
from .services.fitness import FitnessService
from .services.scrobbles import ScrobbleService
from .services.watch_history import WatchHistoryService


def _credential_store(settings: Settings) -> ICredentialStore:
    """Directus si configure, sinon stockage disque local."""
    if settings.directus_enabled:
        return DirectusCredentialStore(
            base_url=settings.directus_url,
            token=settings.directus_token,
            collection=settings.directus_collection,
        )
    return DiskCredentialStore(directory=str(settings.credentials_dir))


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.watch_history_service()
        data = await service.get(limit=10)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Caches - une instance par ressource, duree independante
    hevy_cache = providers.Singleton(
        TTLCache, duration=config.provided.hevy_cache_ttl, name="hevy"
    )
    lastfm_cache = providers.Singleton(
        TTLCache, duration=config.provided.lastfm_cache_ttl, name="lastfm"
    )
    trakt_cache = providers.Singleton(
        TTLCache, duration=config.provided.trakt_cache_ttl, name="trakt"
    )
    poster_cache = providers.Singleton(
        TTLCache, duration=config.provided.poster_cache_ttl, name="posters"
    )

    # Stockage des jetons OAuth
    credential_store = providers.Singleton(_credential_store, settings=config)

    # Clients API
    hevy_client = providers.Singleton(HevyClient, api_key=config.provided.hevy_api_key)
    lastfm_client = providers.Singleton(
        LastFmClient,
        api_key=config.provided.lastfm_api_key,
        username=config.provided.lastfm_username,
    )
    tmdb_client = providers.Singleton(
        TMDBPosterClient, api_key=config.provided.tmdb_api_key
    )

    trakt_http = providers.Singleton(TraktClient.create_http_client)
    token_manager = providers.Singleton(
        TokenRefreshManager,
        token_url=TraktClient.TOKEN_URL,
        client_id=config.provided.trakt_client_id,
        client_secret=config.provided.trakt_client_secret,
        redirect_uri=config.provided.trakt_redirect_uri,
        store=credential_store,
        http_client=trakt_http,
    )
    trakt_client = providers.Singleton(
        TraktClient,
        client_id=config.provided.trakt_client_id,
        token_manager=token_manager,
    )

    # Client HTTP de l'outil marche (nouveau client a chaque fetch)
    market_http = providers.Factory(httpx.AsyncClient, timeout=30.0)

    # Services
    fitness_service = providers.Singleton(
        FitnessService, client=hevy_client, cache=hevy_cache
    )
    scrobble_service = providers.Singleton(
        ScrobbleService, client=lastfm_client, cache=lastfm_cache
    )
    watch_history_service = providers.Singleton(
        WatchHistoryService,
        client=trakt_client,
        store=credential_store,
        cache=trakt_cache,
        poster_client=tmdb_client,
        poster_cache=poster_cache,
    )
