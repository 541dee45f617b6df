"""
Construction de l'URL de recherche des listings CSFloat.

Les filtres a leur valeur neutre ne sont pas envoyes.
"""

import time
from typing import Callable, Optional
from urllib.parse import urlencode

from src.core.entities.market import MonitorFilters

CSFLOAT_ORIGIN = "https://csfloat.com"
LISTINGS_PATH = "/api/v1/listings"


def build_listing_params(
    filters: MonitorFilters,
    now_ms: Optional[Callable[[], int]] = None,
) -> list[tuple[str, str]]:
    """
    Parametres de requete, dans l'ordre attendu par l'API.

    Args:
        filters: Filtres de recherche
        now_ms: Horloge en millisecondes pour le parametre anti-cache "_"
    """
    now_ms = now_ms or (lambda: int(time.time() * 1000))
    params = [
        ("sort_by", filters.sort_by),
        ("limit", str(filters.limit)),
        ("min_price", str(filters.min_price)),
        ("max_price", str(filters.max_price)),
        ("category", str(filters.category)),
        ("_", str(now_ms())),
    ]

    if filters.type != "any":
        params.append(("type", filters.type))

    for name in ("rarity", "def_index", "paint_index", "paint_seed"):
        value = getattr(filters, name)
        if value != -1:
            params.append((name, str(value)))

    if filters.min_float > 0:
        params.append(("min_float", str(filters.min_float)))
    if filters.max_float < 1:
        params.append(("max_float", str(filters.max_float)))
    if filters.min_blue > 0:
        params.append(("min_blue", str(filters.min_blue)))
    if filters.max_blue < 100:
        params.append(("max_blue", str(filters.max_blue)))
    # Une fade inferieure a 80 n'a pas de sens cote API
    if filters.min_fade > 80:
        params.append(("min_fade", str(filters.min_fade)))
    if filters.max_fade < 100:
        params.append(("max_fade", str(filters.max_fade)))

    if filters.min_ref_qty > 0:
        params.append(("min_ref_qty", str(filters.min_ref_qty)))
    if filters.user_id:
        params.append(("user_id", filters.user_id))
    if filters.market_hash_name:
        params.append(("market_hash_name", filters.market_hash_name))

    return params


def build_listing_url(
    filters: MonitorFilters,
    now_ms: Optional[Callable[[], int]] = None,
) -> str:
    """URL complete de recherche des listings."""
    query = urlencode(build_listing_params(filters, now_ms))
    return f"{CSFLOAT_ORIGIN}{LISTINGS_PATH}?{query}"
