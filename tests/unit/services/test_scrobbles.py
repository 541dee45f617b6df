"""
Tests pour ScrobbleService (agregation Last.fm).
"""

import httpx
import pytest
import respx

from src.adapters.api.lastfm_client import LastFmClient
from src.core.errors import ConfigurationError, NotFoundError, UpstreamError
from src.services.scrobbles import ScrobbleService, normalize_track
from tests.fixtures.lastfm_responses import (
    LASTFM_INVALID_KEY,
    LASTFM_RECENT_TRACKS,
    LASTFM_USER_INFO,
    LASTFM_USER_NOT_FOUND,
)

BASE = LastFmClient.BASE_URL


@pytest.fixture
def lastfm_routes():
    with respx.mock(assert_all_called=False) as mock:
        routes = {
            "tracks": mock.get(BASE, params__contains={"method": "user.getrecenttracks"}).mock(
                return_value=httpx.Response(200, json=LASTFM_RECENT_TRACKS)
            ),
            "user": mock.get(BASE, params__contains={"method": "user.getinfo"}).mock(
                return_value=httpx.Response(200, json=LASTFM_USER_INFO)
            ),
        }
        yield routes


@pytest.fixture
def service(make_cache) -> ScrobbleService:
    return ScrobbleService(
        client=LastFmClient(api_key="lastfm-key", username="rgo"), cache=make_cache(duration=300)
    )


class TestNormalizeTrack:
    def test_now_playing_track(self):
        track = normalize_track(LASTFM_RECENT_TRACKS["recenttracks"]["track"][0])
        assert track == {
            "name": "Reckoner",
            "artist": "Radiohead",
            "album": "In Rainbows",
            "url": "https://www.last.fm/music/Radiohead/_/Reckoner",
            "image": "https://lastfm.freetls.fastly.net/i/u/174s/a.png",
            "nowPlaying": True,
            "playedAt": None,
        }

    def test_played_track(self):
        track = normalize_track(LASTFM_RECENT_TRACKS["recenttracks"]["track"][1])
        assert track["nowPlaying"] is False
        assert track["playedAt"] == 1710172800
        assert track["image"] is None


class TestScrobbleService:
    """Tests de l'operation scrobbles."""

    @pytest.mark.asyncio
    async def test_returns_tracks_and_stats(self, service, lastfm_routes):
        result = await service.get(limit=2)

        assert [t["name"] for t in result["tracks"]] == ["Reckoner", "Roads"]
        assert result["stats"] == {
            "username": "rgo",
            "playcount": 51234,
            "registered": 1262304000,
        }

        params = lastfm_routes["tracks"].calls[0].request.url.params
        assert params["user"] == "rgo"
        assert params["api_key"] == "lastfm-key"
        assert params["limit"] == "2"
        assert params["format"] == "json"

    @pytest.mark.asyncio
    async def test_single_track_object_is_wrapped(self, service, lastfm_routes):
        single = {"recenttracks": {"track": LASTFM_RECENT_TRACKS["recenttracks"]["track"][1]}}
        lastfm_routes["tracks"].mock(return_value=httpx.Response(200, json=single))

        result = await service.get()

        assert len(result["tracks"]) == 1

    @pytest.mark.asyncio
    async def test_cached_result_skips_requests(self, service, lastfm_routes):
        await service.get()
        await service.get()
        assert lastfm_routes["tracks"].call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, service, lastfm_routes):
        lastfm_routes["tracks"].mock(return_value=httpx.Response(404, json=LASTFM_USER_NOT_FOUND))

        with pytest.raises(NotFoundError):
            await service.get()

    @pytest.mark.asyncio
    async def test_other_api_error_raises_upstream_error(self, service, lastfm_routes):
        lastfm_routes["tracks"].mock(return_value=httpx.Response(403, json=LASTFM_INVALID_KEY))

        with pytest.raises(UpstreamError) as exc_info:
            await service.get()
        assert "10" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_username_raises_configuration_error(self, make_cache):
        service = ScrobbleService(
            client=LastFmClient(api_key="lastfm-key", username=None), cache=make_cache()
        )
        with pytest.raises(ConfigurationError):
            await service.get()
