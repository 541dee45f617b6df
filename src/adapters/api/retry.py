"""
Relance avec backoff exponentiel pour les appels d'enrichissement.

Seuls les appels "best effort" (posters TMDB) passent par ici: un 429 y est
relance avec un delai croissant et du jitter. Les appels du chemin principal
n'utilisent pas ce mecanisme, tout statut non-2xx y interrompt l'agregation.

Usage:
    response = await request_with_retry(client, "GET", "/movie/27205")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Levee quand une API d'enrichissement retourne 429 Too Many Requests.

    Attributes:
        retry_after: Secondes indiquees par le header Retry-After, ou None
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes; les dates HTTP sont ignorees."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        f"Rate limited, tentative {retry_state.attempt_number} ({exc})"
    )


def with_retry(max_attempts: int = 3, max_wait: int = 30):
    """
    Decorateur relancant une coroutine sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives en secondes
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP en relancant les reponses 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (absolue ou relative au base_url du client)
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres statuts non-2xx (sans relance)
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
