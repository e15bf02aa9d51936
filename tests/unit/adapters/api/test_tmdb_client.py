"""
Tests for TMDBClient - TMDB API client implementation.

Uses respx to mock httpx calls and verifies:
- Authentication mode (v3 key as parameter, v4 token as bearer)
- /movie/{id} requested with all sub-resources in one call
- 404 raises MetadataNotFoundError, exhausted retries raise RemoteUnavailableError
"""

import httpx
import pytest
import pytest_asyncio
import respx

from cinemeta.adapters.api.tmdb_client import TMDBClient
from cinemeta.core.errors import MetadataNotFoundError, RemoteUnavailableError
from cinemeta.core.ports.api_clients import IMetadataProvider
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_RESPONSE,
    TMDB_SEARCH_EMPTY_RESPONSE,
    TMDB_SEARCH_RESPONSE,
)

MOVIE_URL = "https://api.themoviedb.org/3/movie/19995"
SEARCH_URL = "https://api.themoviedb.org/3/search/movie"


@pytest_asyncio.fixture
async def tmdb_client():
    """TMDBClient with a short retry budget."""
    client = TMDBClient(api_key="test_api_key", max_attempts=3, max_wait=0.01)
    yield client
    await client.close()


class TestTMDBClientInterface:

    def test_implements_interface(self, tmdb_client: TMDBClient):
        assert isinstance(tmdb_client, IMetadataProvider)

    def test_image_url(self, tmdb_client: TMDBClient):
        assert (
            tmdb_client.image_url("/abc.jpg")
            == "https://image.tmdb.org/t/p/original/abc.jpg"
        )


class TestTMDBAuthentication:

    @pytest.mark.asyncio
    @respx.mock
    async def test_v3_key_sent_as_query_parameter(self, tmdb_client: TMDBClient):
        route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.get_movie(19995)

        request = route.calls.last.request
        assert request.url.params["api_key"] == "test_api_key"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_v4_token_sent_as_bearer(self):
        token = "eyJhbGciOiJIUzI1NiJ9." + "x" * 60
        client = TMDBClient(api_key=token, max_attempts=1, max_wait=0.01)
        route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await client.get_movie(19995)
        await client.close()

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert "api_key" not in request.url.params


class TestTMDBGetMovie:

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_raw_payload(self, tmdb_client: TMDBClient):
        respx.get(MOVIE_URL).mock(return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE))

        raw = await tmdb_client.get_movie(19995)

        assert raw == TMDB_MOVIE_RESPONSE

    @pytest.mark.asyncio
    @respx.mock
    async def test_requests_all_sub_resources(self, tmdb_client: TMDBClient):
        route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.get_movie(19995)

        params = route.calls.last.request.url.params
        assert params["append_to_response"] == (
            "alternative_titles,credits,images,keywords,releases,release_dates,videos"
        )
        assert params["include_image_language"] == "en,null"
        assert params["language"] == "en-US"

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found_raises(self, tmdb_client: TMDBClient):
        route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(404, json={"status_code": 34})
        )

        with pytest.raises(MetadataNotFoundError):
            await tmdb_client.get_movie(19995)
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_is_retried(self, tmdb_client: TMDBClient):
        route = respx.get(MOVIE_URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json=TMDB_MOVIE_RESPONSE),
            ]
        )

        raw = await tmdb_client.get_movie(19995)

        assert raw["id"] == 19995
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausted_budget_raises_remote_unavailable(self, tmdb_client: TMDBClient):
        route = respx.get(MOVIE_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(RemoteUnavailableError):
            await tmdb_client.get_movie(19995)
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_failure_raises_remote_unavailable(self, tmdb_client: TMDBClient):
        respx.get(MOVIE_URL).mock(side_effect=httpx.ConnectError("unreachable"))

        with pytest.raises(RemoteUnavailableError):
            await tmdb_client.get_movie(19995)

    @pytest.mark.asyncio
    @respx.mock
    async def test_unauthorized_raises_remote_unavailable(self, tmdb_client: TMDBClient):
        respx.get(MOVIE_URL).mock(return_value=httpx.Response(401))

        with pytest.raises(RemoteUnavailableError):
            await tmdb_client.get_movie(19995)


class TestTMDBSearch:

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_raw_results(self, tmdb_client: TMDBClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=TMDB_SEARCH_RESPONSE)
        )

        results = await tmdb_client.search_movies("Avatar")

        assert [r["id"] for r in results] == [19995, 76600]
        assert route.calls.last.request.url.params["query"] == "Avatar"

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_results(self, tmdb_client: TMDBClient):
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=TMDB_SEARCH_EMPTY_RESPONSE)
        )

        assert await tmdb_client.search_movies("zzz") == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_raises_remote_unavailable(self, tmdb_client: TMDBClient):
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(401))

        with pytest.raises(RemoteUnavailableError):
            await tmdb_client.search_movies("Avatar")
