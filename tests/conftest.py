"""
Fixtures pytest partagees pour les tests Cinemeta.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Dossier de film avec sa source publique
- Telechargeur factice qui enregistre les URLs demandees
"""

from pathlib import Path

import pytest

from cinemeta.config import Settings
from cinemeta.core.entities.catalog import CatalogMovie
from tests.fixtures.fakes import MOVIE_FOLDER_URL, FakeDownloader


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler caches, logs et BDD de chaque test.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        tmdb_api_key="test_api_key",
        metadata_cache_dir=tmp_path / "cache" / "tmdb",
        api_cache_dir=tmp_path / "cache" / "api",
        temp_dir=tmp_path / "tmp",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def fake_downloader() -> FakeDownloader:
    """Telechargeur factice sans echec."""
    return FakeDownloader()


@pytest.fixture
def movie_folder(tmp_path: Path) -> Path:
    """Dossier de film vide."""
    folder = tmp_path / "movies" / "Avatar"
    folder.mkdir(parents=True)
    return folder


@pytest.fixture
def catalog_movie(movie_folder: Path) -> CatalogMovie:
    """Film du catalogue pointant sur movie_folder."""
    return CatalogMovie(id=1, folder_path=movie_folder, folder_url=MOVIE_FOLDER_URL, source_id=1)
