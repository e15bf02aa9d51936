"""
Tests unitaires pour MetadataCache.

Verifie:
- Fichier de cache servi tant qu'il a moins de 30 jours
- Recuperation et reecriture au-dela (ou si le fichier est corrompu)
- Appels distants serialises par la porte
- Recherches mises en cache
"""

import asyncio
import json
import os
import time
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from cinemeta.adapters.api.cache import APICache
from cinemeta.adapters.api.gate import RemoteGate
from cinemeta.core.errors import MetadataNotFoundError, RemoteUnavailableError
from cinemeta.core.ports.api_clients import IMetadataProvider
from cinemeta.services.metadata_cache import MetadataCache
from tests.fixtures.tmdb_responses import (
    IMAGE_BASE,
    TMDB_MOVIE_RESPONSE,
    TMDB_SEARCH_RESPONSE,
    movie_response,
)

DAY = 24 * 60 * 60


@pytest.fixture
def provider() -> MagicMock:
    """Fournisseur TMDB simule."""
    mock = MagicMock(spec=IMetadataProvider)
    mock.get_movie = AsyncMock(return_value=movie_response(title="Avatar (remote)"))
    mock.search_movies = AsyncMock(return_value=TMDB_SEARCH_RESPONSE["results"])
    mock.image_url.side_effect = lambda path: f"{IMAGE_BASE}{path}"
    return mock


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "tmdb"


@pytest.fixture
def metadata_cache(provider: MagicMock, cache_dir: Path) -> MetadataCache:
    return MetadataCache(provider=provider, gate=RemoteGate(), cache_dir=cache_dir)


def write_cached(cache_dir: Path, tmdb_id: int, data: dict, age_days: float) -> Path:
    """Ecrit un fichier de cache vieilli de ``age_days`` jours."""
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / f"{tmdb_id}.json"
    path.write_text(json.dumps(data))
    mtime = time.time() - age_days * DAY
    os.utime(path, (mtime, mtime))
    return path


class TestMetadataCacheFreshness:

    def test_cache_path_is_deterministic(self, metadata_cache: MetadataCache, cache_dir: Path):
        assert metadata_cache.cache_path(19995) == cache_dir / "19995.json"

    @pytest.mark.asyncio
    async def test_29_days_old_is_served(self, metadata_cache, provider, cache_dir):
        write_cached(cache_dir, 19995, TMDB_MOVIE_RESPONSE, age_days=29)

        record = await metadata_cache.fetch(19995)

        assert record.title == "Avatar"
        provider.get_movie.assert_not_called()

    @pytest.mark.asyncio
    async def test_31_days_old_is_refetched(self, metadata_cache, provider, cache_dir):
        path = write_cached(cache_dir, 19995, TMDB_MOVIE_RESPONSE, age_days=31)

        record = await metadata_cache.fetch(19995)

        assert record.title == "Avatar (remote)"
        provider.get_movie.assert_awaited_once_with(19995)
        assert json.loads(path.read_text())["title"] == "Avatar (remote)"
        assert time.time() - path.stat().st_mtime < DAY

    @pytest.mark.asyncio
    async def test_missing_file_fetches_and_persists(self, metadata_cache, provider, cache_dir):
        await metadata_cache.fetch(19995)

        assert (cache_dir / "19995.json").exists()
        provider.get_movie.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_second_fetch_uses_cache(self, metadata_cache, provider):
        await metadata_cache.fetch(19995)
        await metadata_cache.fetch(19995)

        assert provider.get_movie.await_count == 1

    @pytest.mark.asyncio
    async def test_corrupt_file_is_a_miss(self, metadata_cache, provider, cache_dir):
        cache_dir.mkdir(parents=True)
        (cache_dir / "19995.json").write_text("not json at all")

        record = await metadata_cache.fetch(19995)

        assert record.title == "Avatar (remote)"
        provider.get_movie.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_a_miss(self, metadata_cache, provider, cache_dir):
        path = write_cached(cache_dir, 19995, {"id": 19995, "credits": "broken"}, age_days=1)

        record = await metadata_cache.fetch(19995)

        assert record.title == "Avatar (remote)"
        provider.get_movie.assert_awaited_once_with(19995)
        assert json.loads(path.read_text())["title"] == "Avatar (remote)"

    @pytest.mark.asyncio
    async def test_custom_max_age(self, provider, cache_dir):
        cache = MetadataCache(provider, RemoteGate(), cache_dir, max_age_days=1)
        write_cached(cache_dir, 19995, TMDB_MOVIE_RESPONSE, age_days=2)

        await cache.fetch(19995)

        provider.get_movie.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_region_passed_to_projection(self, provider, cache_dir):
        cache = MetadataCache(provider, RemoteGate(), cache_dir, region="GB")
        write_cached(cache_dir, 19995, TMDB_MOVIE_RESPONSE, age_days=0)

        record = await cache.fetch(19995)

        assert record.rating == "12A"


class TestMetadataCacheErrors:

    @pytest.mark.asyncio
    async def test_remote_unavailable_propagates(self, metadata_cache, provider, cache_dir):
        provider.get_movie.side_effect = RemoteUnavailableError("TMDB down")

        with pytest.raises(RemoteUnavailableError):
            await metadata_cache.fetch(19995)
        assert not (cache_dir / "19995.json").exists()

    @pytest.mark.asyncio
    async def test_not_found_propagates(self, metadata_cache, provider):
        provider.get_movie.side_effect = MetadataNotFoundError("missing")

        with pytest.raises(MetadataNotFoundError):
            await metadata_cache.fetch(1)


class TestMetadataCacheGate:

    @pytest.mark.asyncio
    async def test_remote_calls_are_serialized(self, provider, cache_dir):
        active = 0
        peak = 0

        async def slow_get_movie(tmdb_id):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return movie_response(id=tmdb_id)

        provider.get_movie.side_effect = slow_get_movie
        cache = MetadataCache(provider, RemoteGate(), cache_dir)

        records = await asyncio.gather(*(cache.fetch(i) for i in (1, 2, 3)))

        assert [r.tmdb_id for r in records] == [1, 2, 3]
        assert peak == 1

    @pytest.mark.asyncio
    async def test_gate_shared_with_search(self, provider, cache_dir):
        gate = RemoteGate()
        seen_busy = []

        async def get_movie(tmdb_id):
            seen_busy.append(gate.busy)
            return movie_response()

        provider.get_movie.side_effect = get_movie
        cache = MetadataCache(provider, gate, cache_dir)

        await cache.fetch(19995)

        assert seen_busy == [True]


class TestMetadataCacheSearch:

    @pytest.mark.asyncio
    async def test_search_projects_results(self, metadata_cache, provider):
        results = await metadata_cache.search("Avatar")

        assert [r.tmdb_id for r in results] == [19995, 76600]
        provider.search_movies.assert_awaited_once_with("Avatar")

    @pytest.mark.asyncio
    async def test_search_results_are_cached(self, provider, cache_dir, tmp_path):
        search_cache = APICache(cache_dir=str(tmp_path / "api"))
        cache = MetadataCache(provider, RemoteGate(), cache_dir, search_cache=search_cache)
        try:
            first = await cache.search("Avatar")
            second = await cache.search("Avatar")
        finally:
            search_cache.close()

        assert first == second
        provider.search_movies.assert_awaited_once()
