"""
Clients API externes et infrastructure d'agregation.

Clients:
- HevyClient: entrainements (routines, statistiques)
- LastFmClient: scrobbles
- TraktClient: historique de visionnage (OAuth avec refresh)
- TMDBPosterClient: posters des films, series et saisons

Infrastructure partagee:
- TTLCache: cache memoire avec expiration paresseuse, une instance par ressource
- fetch_all_pages: parcours des collections paginees
- TokenRefreshManager: refresh OAuth sur 401, au plus une fois par appel
- LookupBatcher: enrichissement deduplique et concurrent
- RateLimitError / request_with_retry: backoff sur 429 (enrichissement)
"""

from src.adapters.api.cache import CacheEntry, TTLCache
from src.adapters.api.enrichment import LookupBatcher
from src.adapters.api.pagination import fetch_all_pages
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.token_refresh import TokenRefreshManager

__all__ = [
    "CacheEntry",
    "TTLCache",
    "LookupBatcher",
    "fetch_all_pages",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
    "TokenRefreshManager",
]
