"""
Adaptateurs de l'outil de surveillance du marche CSFloat.

- build_listing_url : URL de recherche des listings a partir des filtres
- fetch_listings : fetch avec basculement sur une liste de proxies
- order_candidates / permute : ordre aleatoire pondere des proxies
"""

from src.adapters.market.proxy_fetcher import fetch_listings, order_candidates, permute
from src.adapters.market.query import build_listing_url

__all__ = [
    "build_listing_url",
    "fetch_listings",
    "order_candidates",
    "permute",
]
