"""
Cache memoire avec TTL pour les resultats des API externes.

Chaque type de ressource (fitness, scrobbles, historique, posters) possede sa
propre instance avec une duree adaptee a la volatilite du fournisseur.

Expiration paresseuse: une entree expiree est supprimee par la lecture qui la
detecte. Pas de balayage en arriere-plan ni de limite de taille, l'espace des
cles etant borne par les combinaisons de parametres (une cle par limite).
"""

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """Valeur stockee et instant de stockage (horloge du cache)."""

    data: T
    timestamp: float


class TTLCache(Generic[T]):
    """
    Cache cle -> valeur avec duree de vie fixe par instance.

    Attributes:
        HEVY_TTL: Duree par defaut des donnees fitness (3h)
        LASTFM_TTL: Duree par defaut des scrobbles (5 min)
        TRAKT_TTL: Duree par defaut de l'historique (15 min)
        POSTER_TTL: Duree par defaut des posters (7 jours)

    Example:
        cache = TTLCache(duration=TTLCache.POSTER_TTL, name="posters")
        cache.set("movie:27205", "https://image.tmdb.org/t/p/w342/x.jpg")
        url = cache.get("movie:27205")
    """

    HEVY_TTL = 3 * 60 * 60
    LASTFM_TTL = 5 * 60
    TRAKT_TTL = 15 * 60
    POSTER_TTL = 7 * 24 * 60 * 60

    def __init__(
        self,
        duration: float,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise un cache vide.

        Args:
            duration: Duree de vie des entrees en secondes
            name: Nom utilise dans les logs
            clock: Source de temps en secondes (injectable pour les tests)
        """
        self._entries: dict[str, CacheEntry[T]] = {}
        self._duration = duration
        self._name = name
        self._clock = clock

    @property
    def duration(self) -> float:
        return self._duration

    def get(self, key: str) -> Optional[T]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee, ou None si absente ou expiree
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"[{self._name}] MISS {key}")
            return None

        if self._clock() - entry.timestamp > self._duration:
            del self._entries[key]
            logger.debug(f"[{self._name}] EXPIRED {key}")
            return None

        logger.debug(f"[{self._name}] HIT {key}")
        return entry.data

    def set(self, key: str, data: T) -> None:
        """Stocke une valeur, horodatee maintenant (ecrase l'entree existante)."""
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock())

    def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
