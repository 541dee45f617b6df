"""
Fixtures pytest partagees pour les tests Vitrine.

Ce module contient les fixtures communes utilisees dans les tests:
- Horloge manuelle pour les caches TTL
- Mock du credential store et credentials de test
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.adapters.api.cache import TTLCache
from src.config import Settings
from src.core.entities.credentials import Credentials
from src.core.ports.credential_store import ICredentialStore


class FakeClock:
    """Horloge manuelle: le temps n'avance que via advance()."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_cache(clock: FakeClock):
    """Fabrique de TTLCache partageant l'horloge manuelle."""

    def _make(duration: float = 60, name: str = "test") -> TTLCache:
        return TTLCache(duration=duration, name=name, clock=clock)

    return _make


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(access_token="old-access-token", refresh_token="old-refresh-token")


@pytest.fixture
def mock_credential_store(credentials: Credentials) -> AsyncMock:
    """
    Mock de ICredentialStore pour les tests.

    read() retourne les credentials de test par defaut.
    """
    store = AsyncMock(spec=ICredentialStore)
    store.read.return_value = credentials
    store.write.return_value = None
    return store


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires et cles factices.

    Utilise tmp_path de pytest pour isoler le stockage des jetons et les logs.
    """
    return Settings(
        _env_file=None,
        hevy_api_key="hevy-key",
        lastfm_api_key="lastfm-key",
        lastfm_username="rgo",
        trakt_client_id="trakt-id",
        trakt_client_secret="trakt-secret",
        tmdb_api_key="test_api_key",
        credentials_dir=tmp_path / "credentials",
        log_file=tmp_path / "logs" / "vitrine.log",
    )
