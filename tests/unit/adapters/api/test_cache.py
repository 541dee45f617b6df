"""
Tests unitaires pour le cache TTL memoire.

Ces tests verifient:
- set/get basique et cles absentes
- Expiration paresseuse: l'entree expiree est supprimee a la lecture
- Re-stockage apres expiration
- clear() et independance des instances
"""

from src.adapters.api.cache import CacheEntry, TTLCache


class TestTTLCacheBasics:
    """Tests pour les operations de base du cache."""

    def test_get_missing_key_returns_none(self, make_cache) -> None:
        cache = make_cache()
        assert cache.get("absent") is None

    def test_set_then_get_returns_value(self, make_cache) -> None:
        cache = make_cache()
        cache.set("trakt:10", {"history": []})
        assert cache.get("trakt:10") == {"history": []}
        assert len(cache) == 1

    def test_set_overwrites_existing_entry(self, make_cache) -> None:
        cache = make_cache()
        cache.set("k", "first")
        cache.set("k", "second")
        assert cache.get("k") == "second"
        assert len(cache) == 1

    def test_contains(self, make_cache) -> None:
        cache = make_cache()
        cache.set("k", 1)
        assert "k" in cache
        assert "other" not in cache

    def test_default_durations(self) -> None:
        """Durees par ressource: Hevy 3h, Last.fm 5 min, Trakt 15 min, posters 7j."""
        assert TTLCache.HEVY_TTL == 10800
        assert TTLCache.LASTFM_TTL == 300
        assert TTLCache.TRAKT_TTL == 900
        assert TTLCache.POSTER_TTL == 604800


class TestTTLCacheExpiry:
    """Tests pour l'expiration des entrees."""

    def test_entry_still_valid_at_exact_duration(self, make_cache, clock) -> None:
        cache = make_cache(duration=60)
        cache.set("k", "v")
        clock.advance(60)
        assert cache.get("k") == "v"

    def test_expired_entry_is_evicted_on_read(self, make_cache, clock) -> None:
        cache = make_cache(duration=60)
        cache.set("k", "v")
        clock.advance(61)

        assert cache.get("k") is None
        # L'entree a ete supprimee par la lecture
        assert len(cache) == 0

    def test_expired_entry_stays_until_read(self, make_cache, clock) -> None:
        """Pas de balayage: l'entree n'est supprimee que par une lecture."""
        cache = make_cache(duration=60)
        cache.set("k", "v")
        clock.advance(3600)
        assert len(cache) == 1

    def test_set_after_expiry_restarts_lifetime(self, make_cache, clock) -> None:
        cache = make_cache(duration=60)
        cache.set("k", "old")
        clock.advance(61)
        assert cache.get("k") is None

        cache.set("k", "new")
        clock.advance(30)
        assert cache.get("k") == "new"

    def test_overwrite_refreshes_timestamp(self, make_cache, clock) -> None:
        cache = make_cache(duration=60)
        cache.set("k", "v1")
        clock.advance(50)
        cache.set("k", "v2")
        clock.advance(50)
        assert cache.get("k") == "v2"


class TestTTLCacheInstances:
    """Tests pour clear() et l'isolation des instances."""

    def test_clear_removes_everything(self, make_cache) -> None:
        cache = make_cache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None

    def test_instances_have_independent_durations(self, make_cache, clock) -> None:
        short = make_cache(duration=300, name="lastfm")
        long = make_cache(duration=10800, name="hevy")
        short.set("k", "scrobbles")
        long.set("k", "fitness")

        clock.advance(301)
        assert short.get("k") is None
        assert long.get("k") == "fitness"

    def test_cache_entry_holds_timestamp(self, make_cache, clock) -> None:
        cache = make_cache()
        cache.set("k", "v")
        entry = cache._entries["k"]
        assert isinstance(entry, CacheEntry)
        assert entry.timestamp == clock.now
