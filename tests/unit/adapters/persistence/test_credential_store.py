"""
Tests pour les credential stores (diskcache local et Directus).
"""

import json

import httpx
import pytest
import respx

from src.adapters.persistence.credential_store import (
    DirectusCredentialStore,
    DiskCredentialStore,
)
from src.core.entities.credentials import Credentials
from src.core.errors import TransportError, UpstreamError
from src.core.ports.credential_store import ICredentialStore

DIRECTUS_URL = "https://cms.example.com/items/trakt_tokens"


@pytest.fixture
def disk_store(tmp_path):
    store = DiskCredentialStore(directory=str(tmp_path / "credentials"))
    yield store
    # Fermeture synchrone du Cache sous-jacent (teardown hors boucle)
    store._cache.close()


@pytest.fixture
def directus_store() -> DirectusCredentialStore:
    return DirectusCredentialStore(base_url="https://cms.example.com/", token="static-token")


class TestDiskCredentialStore:
    """Tests du stockage local."""

    def test_implements_interface(self, disk_store):
        assert isinstance(disk_store, ICredentialStore)

    @pytest.mark.asyncio
    async def test_empty_store_reads_none(self, disk_store):
        assert await disk_store.read() is None

    @pytest.mark.asyncio
    async def test_write_then_read(self, disk_store):
        credentials = Credentials(
            access_token="a", refresh_token="r", expires_at="2024-06-09T00:00:00+00:00"
        )
        await disk_store.write(credentials)
        assert await disk_store.read() == credentials

    @pytest.mark.asyncio
    async def test_write_replaces_previous_pair(self, disk_store):
        await disk_store.write(Credentials(access_token="a1", refresh_token="r1"))
        await disk_store.write(Credentials(access_token="a2", refresh_token="r2"))

        current = await disk_store.read()
        assert current.access_token == "a2"
        assert current.refresh_token == "r2"

    @pytest.mark.asyncio
    async def test_survives_reopen(self, tmp_path):
        directory = str(tmp_path / "credentials")
        store = DiskCredentialStore(directory=directory)
        await store.write(Credentials(access_token="a", refresh_token="r"))
        await store.close()

        reopened = DiskCredentialStore(directory=directory)
        try:
            assert (await reopened.read()).access_token == "a"
        finally:
            await reopened.close()


class TestDirectusCredentialStore:
    """Tests du stockage Directus (singleton)."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_read_returns_credentials(self, directus_store):
        route = respx.get(DIRECTUS_URL).mock(
            return_value=httpx.Response(
                200,
                json={"data": {"access_token": " a ", "refresh_token": "r", "expires_at": None}},
            )
        )

        credentials = await directus_store.read()

        assert credentials == Credentials(access_token="a", refresh_token="r")
        assert route.calls[0].request.headers["Authorization"] == "Bearer static-token"

    @pytest.mark.asyncio
    @respx.mock
    async def test_read_empty_singleton_returns_none(self, directus_store):
        respx.get(DIRECTUS_URL).mock(return_value=httpx.Response(200, json={"data": None}))
        assert await directus_store.read() is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_write_patches_singleton(self, directus_store):
        route = respx.patch(DIRECTUS_URL).mock(return_value=httpx.Response(200, json={}))
        credentials = Credentials(access_token="a", refresh_token="r", token_type="bearer")

        await directus_store.write(credentials)

        body = json.loads(route.calls[0].request.content)
        assert body["access_token"] == "a"
        assert body["refresh_token"] == "r"
        assert body["token_type"] == "bearer"

    @pytest.mark.asyncio
    @respx.mock
    async def test_write_failure_raises_upstream_error(self, directus_store):
        respx.patch(DIRECTUS_URL).mock(return_value=httpx.Response(403, text="forbidden"))

        with pytest.raises(UpstreamError) as exc_info:
            await directus_store.write(Credentials(access_token="a", refresh_token="r"))
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_failure_raises_transport_error(self, directus_store):
        respx.get(DIRECTUS_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(TransportError):
            await directus_store.read()

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body_raises_transport_error(self, directus_store):
        respx.get(DIRECTUS_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(TransportError) as exc_info:
            await directus_store.read()
        assert exc_info.value.code == "UPSTREAM_ERROR"

    @pytest.mark.asyncio
    @respx.mock
    async def test_unexpected_body_shape_raises_transport_error(self, directus_store):
        respx.get(DIRECTUS_URL).mock(return_value=httpx.Response(200, json=["unexpected"]))

        with pytest.raises(TransportError):
            await directus_store.read()

    @pytest.mark.asyncio
    @respx.mock
    async def test_singleton_that_is_not_an_object_raises_transport_error(self, directus_store):
        respx.get(DIRECTUS_URL).mock(
            return_value=httpx.Response(200, json={"data": ["a", "r"]})
        )

        with pytest.raises(TransportError):
            await directus_store.read()

    @pytest.mark.asyncio
    async def test_close_releases_http_client(self):
        http_client = httpx.AsyncClient()
        store = DirectusCredentialStore(
            base_url="https://cms.example.com", token="static-token", http_client=http_client
        )

        await store.close()

        assert http_client.is_closed
