"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe VITRINE_,
et peut optionnellement être fournie via un fichier .env.

Les clés API sont optionnelles : une opération dont la clé manque échoue avec une
erreur CONFIGURATION_MISSING au moment de l'appel, sans requête réseau.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.entities.market import DynamicConstants, ProxyConfig

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe VITRINE_.
    Exemple : VITRINE_LOG_LEVEL=DEBUG

    Les listes (proxies) sont lues en JSON :
    VITRINE_MARKET_PROXIES='[{"url": "http://localhost:8010", "is_direct": true}]'
    """

    model_config = SettingsConfigDict(
        env_prefix="VITRINE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Clés API (OPTIONNELLES)
    hevy_api_key: Optional[str] = Field(default=None)
    lastfm_api_key: Optional[str] = Field(default=None)
    lastfm_username: Optional[str] = Field(default=None)
    trakt_client_id: Optional[str] = Field(default=None)
    trakt_client_secret: Optional[str] = Field(default=None)
    trakt_redirect_uri: str = Field(default="urn:ietf:wg:oauth:2.0:oob")
    tmdb_api_key: Optional[str] = Field(default=None)

    # Stockage des jetons Trakt : Directus si configuré, sinon disque local
    directus_url: Optional[str] = Field(default=None)
    directus_token: Optional[str] = Field(default=None)
    directus_collection: str = Field(default="trakt_tokens")
    credentials_dir: Path = Field(default=Path(".cache/credentials"))

    # Durées de cache en secondes (une par type de ressource)
    hevy_cache_ttl: int = Field(default=3 * 60 * 60, ge=0)
    lastfm_cache_ttl: int = Field(default=5 * 60, ge=0)
    trakt_cache_ttl: int = Field(default=15 * 60, ge=0)
    poster_cache_ttl: int = Field(default=7 * 24 * 60 * 60, ge=0)

    # Marché CSFloat
    csfloat_api_key: Optional[str] = Field(default=None)
    market_proxies: list[ProxyConfig] = Field(default_factory=list)
    dyn_discount_base_price: float = Field(default=10.0, gt=0)
    dyn_discount_min_percent: float = Field(default=0.03, ge=0, le=1)
    dyn_discount_max_percent: float = Field(default=0.10, ge=0, le=1)
    dyn_discount_max_price: float = Field(default=100000.0, gt=0)
    min_discount_abs: float = Field(default=20.0, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/vitrine.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("credentials_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def hevy_enabled(self) -> bool:
        return bool(self.hevy_api_key)

    @property
    def lastfm_enabled(self) -> bool:
        return bool(self.lastfm_api_key and self.lastfm_username)

    @property
    def trakt_enabled(self) -> bool:
        return bool(self.trakt_client_id and self.trakt_client_secret)

    @property
    def tmdb_enabled(self) -> bool:
        return bool(self.tmdb_api_key)

    @property
    def directus_enabled(self) -> bool:
        """Vérifie si le stockage Directus des jetons est configuré."""
        return bool(self.directus_url and self.directus_token)

    @property
    def discount_constants(self) -> DynamicConstants:
        return DynamicConstants(
            base_price=self.dyn_discount_base_price,
            min_percent=self.dyn_discount_min_percent,
            max_percent=self.dyn_discount_max_percent,
            max_price=self.dyn_discount_max_price,
        )
