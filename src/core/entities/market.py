"""
Entites de l'outil de surveillance du marche (listings CSFloat).

Les listings restent des dict bruts: seuls les champs lus par la detection
de bonnes affaires sont exposes via Listing.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ProxyConfig:
    """
    Intermediaire reseau utilise pour joindre l'API des listings.

    Attributes:
        url: URL du proxy
        is_direct: True si le proxy remplace l'origine (reecriture du chemin),
                   False si l'URL cible est ajoutee a la suite de l'URL du proxy
        encode_target: Encoder l'URL cible avant de l'ajouter (proxies non directs)
    """

    url: str
    is_direct: bool = False
    encode_target: bool = False

    @property
    def label(self) -> str:
        return self.url


@dataclass
class FetchResult:
    """
    Resultat d'un fetch logique de listings, quel que soit le nombre de proxies essayes.

    Attributes:
        listings: Listings recus (vide en cas d'echec)
        status: 200 succes, 429 rate limit, 500 echec de tous les candidats
        reset_time: Secondes avant reinitialisation du rate limit (header X-RateLimit-Reset)
        proxy_used: URL du proxy ayant repondu, ou "Direct"
        error: Dernier message d'erreur enregistre
    """

    listings: list[dict[str, Any]] = field(default_factory=list)
    status: int = 200
    reset_time: Optional[int] = None
    proxy_used: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def rate_limited(self) -> bool:
        return self.status == 429


@dataclass(frozen=True)
class DynamicConstants:
    """Parametres de la courbe de remise dynamique (prix en dollars)."""

    base_price: float
    min_percent: float
    max_percent: float
    max_price: float = 100000.0


@dataclass
class MonitorFilters:
    """
    Filtres de recherche des listings.

    Les valeurs -1 (index), 0/1 (float) et 0/100 (blue) sont neutres et ne
    sont pas envoyees a l'API. Prix en centimes.
    """

    sort_by: str = "most_recent"
    limit: int = 30
    min_price: int = 500
    max_price: int = 100000
    category: int = 0
    type: str = "any"
    rarity: int = -1
    def_index: int = -1
    paint_index: int = -1
    paint_seed: int = -1
    min_float: float = 0.0
    max_float: float = 1.0
    min_blue: float = 0.0
    max_blue: float = 100.0
    min_fade: float = 80.0
    max_fade: float = 100.0
    min_ref_qty: int = 0
    user_id: Optional[str] = None
    market_hash_name: Optional[str] = None


class Listing:
    """Vue en lecture seule sur un listing brut."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    @property
    def id(self) -> str:
        return str(self._data.get("id", ""))

    @property
    def price(self) -> int:
        """Prix demande en centimes."""
        return int(self._data.get("price") or 0)

    @property
    def reference_price(self) -> Optional[int]:
        """Prix de reference en centimes (predicted_price, sinon base_price)."""
        reference = self._data.get("reference") or {}
        value = reference.get("predicted_price") or reference.get("base_price")
        return int(value) if value else None

    @property
    def market_hash_name(self) -> str:
        return (self._data.get("item") or {}).get("market_hash_name", "")
