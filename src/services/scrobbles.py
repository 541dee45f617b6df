"""
Agregation des scrobbles Last.fm: derniers titres et statistiques du compte.
"""

from typing import Any, Optional

from src.adapters.api.cache import TTLCache
from src.adapters.api.lastfm_client import LastFmClient
from src.core.errors import ConfigurationError


def _text(value: Any) -> Optional[str]:
    """Last.fm encode les champs texte en {"#text": ...}."""
    if isinstance(value, dict):
        return value.get("#text") or value.get("name") or None
    return value or None


def _largest_image(images: list[dict[str, Any]]) -> Optional[str]:
    # Les images sont triees de la plus petite a la plus grande
    for image in reversed(images or []):
        if image.get("#text"):
            return image["#text"]
    return None


def normalize_track(track: dict[str, Any]) -> dict[str, Any]:
    now_playing = (track.get("@attr") or {}).get("nowplaying") == "true"
    played_at = (track.get("date") or {}).get("uts")
    return {
        "name": track.get("name"),
        "artist": _text(track.get("artist")),
        "album": _text(track.get("album")),
        "url": track.get("url"),
        "image": _largest_image(track.get("image") or []),
        "nowPlaying": now_playing,
        "playedAt": int(played_at) if played_at else None,
    }


class ScrobbleService:
    """Operation d'agregation Last.fm, resultat mis en cache par limite."""

    DEFAULT_LIMIT = 10

    def __init__(self, client: LastFmClient, cache: TTLCache[dict[str, Any]]) -> None:
        self._client = client
        self._cache = cache

    async def get(self, force_refresh: bool = False, limit: Optional[int] = None) -> dict[str, Any]:
        """
        Retourne les derniers scrobbles et les statistiques du compte.

        Raises:
            ConfigurationError: Cle API ou utilisateur absent
            NotFoundError: Utilisateur inconnu de Last.fm
            UpstreamError: Erreur de l'API ou echec reseau
        """
        limit = limit or self.DEFAULT_LIMIT
        cache_key = f"lastfm:{limit}"

        if not force_refresh:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        if not self._client.configured:
            raise ConfigurationError("Last.fm API key or username not configured")

        tracks = await self._client.get_recent_tracks(limit)
        user = await self._client.get_user_info()

        registered = (user.get("registered") or {}).get("unixtime")
        result = {
            "tracks": [normalize_track(t) for t in tracks],
            "stats": {
                "username": user.get("name") or self._client.username,
                "playcount": int(user.get("playcount") or 0),
                "registered": int(registered) if registered else None,
            },
        }

        self._cache.set(cache_key, result)
        return result
