"""
Enrichissement secondaire par lots (posters).

Les elements d'une collection principale referencent des identifiants
externes, souvent repetes (plusieurs episodes d'une meme saison). Le lot:
1. calcule les cles distinctes (kind, id[, sous-cle])
2. consulte un cache TTL dedie pour chaque cle
3. lance toutes les recherches manquantes en parallele, chacune absorbant
   son propre echec (resultat None, jamais d'echec du lot)
4. associe chaque element a son resultat via sa cle
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, Hashable, Optional, Sequence, TypeVar

from loguru import logger

from src.adapters.api.cache import TTLCache

V = TypeVar("V")

LookupKey = tuple[Hashable, ...]


def default_cache_key(key: LookupKey) -> str:
    """("season", 1399, 2) -> "season:1399:2"."""
    return ":".join(str(part) for part in key)


class LookupBatcher(Generic[V]):
    """
    Recherches secondaires dedupliquees, cachees et concurrentes.

    Example:
        batcher = LookupBatcher(key_for=poster_key, lookup=tmdb.get_poster,
                                cache=poster_cache)
        posters = await batcher.resolve(history_items)
    """

    def __init__(
        self,
        key_for: Callable[[Any], Optional[LookupKey]],
        lookup: Callable[[LookupKey], Awaitable[Optional[V]]],
        cache: TTLCache[V],
        cache_key: Callable[[LookupKey], str] = default_cache_key,
    ) -> None:
        """
        Args:
            key_for: Extrait la cle d'un element (None: pas d'enrichissement)
            lookup: Recherche reseau pour une cle
            cache: Cache TTL dedie (longue duree)
            cache_key: Conversion de la cle en cle de cache
        """
        self._key_for = key_for
        self._lookup = lookup
        self._cache = cache
        self._cache_key = cache_key

    async def resolve(self, items: Sequence[Any]) -> list[Optional[V]]:
        """
        Enrichit une collection.

        Args:
            items: Elements de la collection principale

        Returns:
            Un resultat (ou None) par element, dans l'ordre de items
        """
        keys = [self._key_for(item) for item in items]
        distinct = list(dict.fromkeys(key for key in keys if key is not None))

        results: dict[LookupKey, Optional[V]] = {}
        missing: list[LookupKey] = []
        for key in distinct:
            cached = self._cache.get(self._cache_key(key))
            if cached is not None:
                results[key] = cached
            else:
                missing.append(key)

        if missing:
            logger.debug(
                f"Enrichment: {len(distinct)} distinct keys, {len(missing)} lookups"
            )
            found = await asyncio.gather(*(self._safe_lookup(key) for key in missing))
            for key, value in zip(missing, found):
                results[key] = value
                if value is not None:
                    self._cache.set(self._cache_key(key), value)

        return [results.get(key) if key is not None else None for key in keys]

    async def _safe_lookup(self, key: LookupKey) -> Optional[V]:
        try:
            return await self._lookup(key)
        except Exception as e:  # enrichissement best effort
            logger.warning(f"Enrichment lookup failed for {key}: {type(e).__name__}: {e}")
            return None
