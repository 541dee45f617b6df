"""
Fetch des listings avec basculement sur une liste de proxies.

Les candidats sont essayes l'un apres l'autre, jamais en parallele:
- 401/403 : echec d'authentification pour ce proxy, candidat suivant
- 429 : arret immediat, les autres proxies partagent le meme quota
- autre statut non-2xx ou erreur reseau : candidat suivant
- succes : retour immediat

Le fetch ne leve jamais d'exception: le resultat porte le statut et l'erreur.
"""

import random
from typing import Any, Optional, Sequence, TypeVar
from urllib.parse import quote

import httpx
from loguru import logger

from src.adapters.market.query import CSFLOAT_ORIGIN
from src.core.entities.market import FetchResult, ProxyConfig

T = TypeVar("T")

# Probabilite de placer les proxies distants en premier (repartition de charge)
OTHER_FIRST_PROBABILITY = 0.15
LOCAL_HOST_MARKERS = ("localhost", "127.0.0.1")
DIRECT_LABEL = "Direct"


def permute(items: Sequence[T], rng: random.Random) -> list[T]:
    """Permutation aleatoire uniforme (copie, l'entree n'est pas modifiee)."""
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def is_local(proxy: ProxyConfig) -> bool:
    return proxy.is_direct and any(marker in proxy.url for marker in LOCAL_HOST_MARKERS)


def order_candidates(
    proxies: Sequence[ProxyConfig],
    rng: Optional[random.Random] = None,
) -> list[Optional[ProxyConfig]]:
    """
    Ordre d'essai des proxies.

    Sans proxy configure, un seul essai direct (None). Sinon les proxies
    locaux et les autres sont melanges separement; les locaux passent en
    premier sauf dans 15% des cas.

    Args:
        proxies: Proxies configures
        rng: Source aleatoire (injectable pour les tests)
    """
    if not proxies:
        return [None]

    rng = rng or random.Random()
    local = permute([p for p in proxies if is_local(p)], rng)
    other = permute([p for p in proxies if not is_local(p)], rng)

    if rng.random() < OTHER_FIRST_PROBABILITY and other:
        return [*other, *local]
    return [*local, *other]


def build_request_url(target_url: str, proxy: Optional[ProxyConfig]) -> str:
    """
    URL effective pour un candidat.

    Proxy direct: l'origine est remplacee par l'URL du proxy.
    Proxy classique: l'URL cible est ajoutee apres l'URL du proxy.
    """
    if proxy is None:
        return target_url
    if proxy.is_direct:
        path = target_url.replace(CSFLOAT_ORIGIN, "", 1)
        return proxy.url.rstrip("/") + path
    target = quote(target_url, safe="") if proxy.encode_target else target_url
    return proxy.url + target


def _parse_reset(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def fetch_listings(
    client: httpx.AsyncClient,
    target_url: str,
    api_key: Optional[str],
    proxies: Sequence[ProxyConfig] = (),
    rng: Optional[random.Random] = None,
) -> FetchResult:
    """
    Recupere les listings en essayant chaque candidat dans l'ordre.

    Args:
        client: Client httpx
        target_url: URL complete de l'API des listings
        api_key: Cle API envoyee dans le header Authorization
        proxies: Proxies configures
        rng: Source aleatoire pour l'ordre des candidats

    Returns:
        FetchResult: 200 avec listings, 429 avec reset_time, ou 500 avec la
        derniere erreur si tous les candidats ont echoue
    """
    headers = {"Accept": "application/json"}
    if api_key:
        headers["Authorization"] = api_key

    last_error = ""

    for proxy in order_candidates(proxies, rng):
        label = proxy.label if proxy else DIRECT_LABEL
        url = build_request_url(target_url, proxy)

        try:
            response = await client.get(url, headers=headers)

            if response.status_code in (401, 403):
                last_error = (
                    f"Proxy {label} auth failed: {response.status_code} "
                    f"{response.reason_phrase}. Check the API key or whether "
                    "the proxy forwards the Authorization header."
                )
                logger.warning(last_error)
                continue

            if response.status_code == 429:
                reset_time = _parse_reset(response.headers.get("X-RateLimit-Reset"))
                logger.warning(f"Rate limited via {label}, reset in {reset_time}s")
                return FetchResult(
                    listings=[], status=429, reset_time=reset_time, proxy_used=label
                )

            if not response.is_success:
                last_error = (
                    f"Proxy {label} error: {response.status_code} {response.reason_phrase}"
                )
                logger.warning(last_error)
                continue

            data: Any = response.json()
            listings = data.get("data") or data.get("listings") or []
            return FetchResult(listings=listings, status=200, proxy_used=label)

        except httpx.TransportError as e:
            last_error = f"Proxy {label} failed: network failure ({type(e).__name__})"
            logger.warning(last_error)
        except Exception as e:  # aucun echec ne doit remonter a la boucle de polling
            last_error = f"Proxy {label} failed: {e or type(e).__name__}"
            logger.warning(last_error)

    return FetchResult(listings=[], status=500, error=last_error)
