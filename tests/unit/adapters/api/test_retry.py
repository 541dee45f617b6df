"""
Tests unitaires pour la relance des appels d'enrichissement.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance uniquement sur RateLimitError
- request_with_retry convertit les 429 et laisse remonter les autres statuts
"""

import httpx
import pytest
import respx

from src.adapters.api.retry import (
    RateLimitError,
    _parse_retry_after,
    request_with_retry,
    with_retry,
)

POSTER_URL = "https://api.themoviedb.org/3/movie/27205"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=12)
        assert error.retry_after == 12
        assert "12" in str(error)

    def test_parse_retry_after_ignores_http_dates(self) -> None:
        assert _parse_retry_after("5") == 5
        assert _parse_retry_after("Wed, 21 Oct 2026 07:28:00 GMT") is None
        assert _parse_retry_after(None) is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self) -> None:
        """with_retry relance tant que RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise RateLimitError(retry_after=1)
            return "poster"

        assert await flaky() == "poster"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> str:
            nonlocal call_count
            call_count += 1
            raise KeyError("poster_path")

        with pytest.raises(KeyError):
            await broken()
        assert call_count == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_429_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(POSTER_URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"poster_path": "/x.jpg"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", POSTER_URL, max_attempts=2)

        assert response.json() == {"poster_path": "/x.jpg"}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_persistent_429_raises_rate_limit(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(POSTER_URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", POSTER_URL, max_attempts=2)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_are_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(POSTER_URL).mock(return_value=httpx.Response(503))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", POSTER_URL)

        assert exc_info.value.response.status_code == 503
        assert route.call_count == 1
