"""
Agregation de l'historique de visionnage Trakt, enrichi des posters TMDB.

Deroulement d'un appel sans cache:
1. verification du client OAuth, puis lecture et verification des
   credentials du store
2. historique recent (refresh du jeton sur 401, au plus une fois)
3. statistiques du compte avec les credentials eventuellement rafraichis
   (meme regle de refresh, independamment de l'appel precedent)
4. posters via le LookupBatcher (echecs absorbes, poster None)
"""

from typing import Any, Optional

from loguru import logger

from src.adapters.api.cache import TTLCache
from src.adapters.api.enrichment import LookupBatcher, LookupKey
from src.adapters.api.tmdb_client import TMDBPosterClient
from src.adapters.api.trakt_client import TraktClient
from src.core.ports.credential_store import ICredentialStore


def poster_key(item: dict[str, Any]) -> Optional[LookupKey]:
    """
    Cle d'enrichissement d'un element d'historique.

    Un film donne ("movie", tmdb_id), un episode ("season", show_tmdb_id, saison).
    """
    if item.get("type") == "movie":
        tmdb_id = ((item.get("movie") or {}).get("ids") or {}).get("tmdb")
        return ("movie", tmdb_id) if tmdb_id else None

    if item.get("type") == "episode":
        show_id = ((item.get("show") or {}).get("ids") or {}).get("tmdb")
        season = (item.get("episode") or {}).get("season")
        if show_id and season is not None:
            return ("season", show_id, season)
        return ("show", show_id) if show_id else None

    return None


def normalize_history_item(item: dict[str, Any], poster: Optional[str]) -> dict[str, Any]:
    if item.get("type") == "episode":
        show = item.get("show") or {}
        episode = item.get("episode") or {}
        return {
            "id": item.get("id"),
            "type": "episode",
            "title": show.get("title"),
            "year": show.get("year"),
            "watchedAt": item.get("watched_at"),
            "poster": poster,
            "episode": {
                "season": episode.get("season"),
                "number": episode.get("number"),
                "title": episode.get("title"),
            },
        }

    movie = item.get("movie") or {}
    return {
        "id": item.get("id"),
        "type": item.get("type"),
        "title": movie.get("title"),
        "year": movie.get("year"),
        "watchedAt": item.get("watched_at"),
        "poster": poster,
    }


def normalize_stats(stats: dict[str, Any]) -> dict[str, Any]:
    movies = stats.get("movies") or {}
    shows = stats.get("shows") or {}
    episodes = stats.get("episodes") or {}
    return {
        "movies": {"watched": movies.get("watched", 0), "minutes": movies.get("minutes", 0)},
        "shows": {"watched": shows.get("watched", 0)},
        "episodes": {
            "watched": episodes.get("watched", 0),
            "minutes": episodes.get("minutes", 0),
        },
    }


class WatchHistoryService:
    """
    Operation d'agregation Trakt + TMDB, resultat mis en cache par limite.

    Le resultat normalise a la forme:
        {"history": [{"id", "type", "title", "year", "watchedAt", "poster",
                      "episode"?: {"season", "number", "title"}}],
         "stats": {"movies": {...}, "shows": {...}, "episodes": {...}}}
    """

    DEFAULT_LIMIT = 10

    def __init__(
        self,
        client: TraktClient,
        store: ICredentialStore,
        cache: TTLCache[dict[str, Any]],
        poster_client: TMDBPosterClient,
        poster_cache: TTLCache[str],
    ) -> None:
        self._client = client
        self._store = store
        self._cache = cache
        self._poster_client = poster_client
        self._posters = LookupBatcher(
            key_for=poster_key,
            lookup=poster_client.get_poster,
            cache=poster_cache,
        )

    async def get(self, force_refresh: bool = False, limit: Optional[int] = None) -> dict[str, Any]:
        """
        Retourne l'historique recent et les statistiques Trakt.

        Raises:
            ConfigurationError: Jeton, refresh token, client id/secret absent,
                                ou refresh refuse par Trakt
            UpstreamError: Statut non-2xx, 401 persistant, ou echec reseau
        """
        limit = limit or self.DEFAULT_LIMIT
        cache_key = f"trakt:{limit}"

        if not force_refresh:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        tokens = self._client.token_manager
        tokens.require_client()
        credentials = tokens.require(await self._store.read())

        history, credentials = await self._client.get_history(credentials, limit)
        stats, credentials = await self._client.get_stats(credentials)

        if self._poster_client.configured:
            posters = await self._posters.resolve(history)
        else:
            logger.debug("TMDB not configured, skipping posters")
            posters = [None] * len(history)

        result = {
            "history": [
                normalize_history_item(item, poster)
                for item, poster in zip(history, posters)
            ],
            "stats": normalize_stats(stats),
        }

        self._cache.set(cache_key, result)
        return result
