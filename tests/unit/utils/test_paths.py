"""
Tests unitaires pour les utilitaires de chemins et d'URLs publiques.

Verifie:
- Normalisation des separateurs
- Inclusion par la chaine des parents (pas par prefixe de chaine)
- Conversion d'un chemin local en URL publique
"""

import os
from pathlib import Path

import pytest

from cinemeta.core.entities.catalog import Source
from cinemeta.core.errors import UnknownSourceError
from cinemeta.utils.paths import (
    convert_paths_into_urls,
    is_contained_by_directory,
    join_url,
    normalize_path,
    path_to_url,
)


@pytest.fixture
def sources() -> list[Source]:
    return [
        Source(id=1, folder_path=Path("/media/movies"), url="http://server/movies"),
        Source(id=2, folder_path=Path("/media/movies2"), url="http://server/other/"),
    ]


class TestNormalizePath:
    """Tests pour normalize_path()."""

    def test_replaces_both_separators(self):
        result = normalize_path("media\\movies/Avatar.mkv", is_file=True)
        assert result == os.sep.join(["media", "movies", "Avatar.mkv"])

    def test_directory_gets_trailing_separator(self):
        assert normalize_path("media/movies", is_file=False).endswith(os.sep)

    def test_directory_separator_not_doubled(self):
        result = normalize_path("media/movies/", is_file=False)
        assert not result.endswith(os.sep * 2)

    def test_file_has_no_trailing_separator(self):
        assert not normalize_path("media/poster.jpg", is_file=True).endswith(os.sep)


class TestIsContainedByDirectory:
    """Tests pour is_contained_by_directory()."""

    def test_direct_child(self):
        assert is_contained_by_directory("/media/movies/Avatar", "/media/movies")

    def test_nested_child(self):
        assert is_contained_by_directory("/media/movies/Avatar/poster.jpg", "/media/movies")

    def test_sibling_with_common_prefix_is_not_contained(self):
        """/media/movies2 n'est pas dans /media/movies."""
        assert not is_contained_by_directory("/media/movies2/Avatar", "/media/movies")

    def test_directory_does_not_contain_itself(self):
        assert not is_contained_by_directory("/media/movies", "/media/movies")

    def test_trailing_separator_on_parent(self):
        assert is_contained_by_directory("/media/movies/Avatar", "/media/movies/")


class TestPathToUrl:
    """Tests pour path_to_url() et convert_paths_into_urls()."""

    def test_builds_url_from_relative_path(self, sources):
        url = path_to_url(sources, "/media/movies/Avatar/poster.jpg")
        assert url == "http://server/movies/Avatar/poster.jpg"

    def test_picks_source_by_parent_chain(self, sources):
        """Le dossier movies2 est servi par sa propre source."""
        url = path_to_url(sources, Path("/media/movies2/Alien/poster.jpg"))
        assert url == "http://server/other/Alien/poster.jpg"

    def test_unknown_source_raises(self, sources):
        with pytest.raises(UnknownSourceError, match="Unable to determine source"):
            path_to_url(sources, "/elsewhere/Avatar/poster.jpg")

    def test_convert_preserves_order(self, sources):
        urls = convert_paths_into_urls(
            sources,
            ["/media/movies2/B.jpg", "/media/movies/A.jpg"],
        )
        assert urls == ["http://server/other/B.jpg", "http://server/movies/A.jpg"]

    def test_convert_empty_list(self, sources):
        assert convert_paths_into_urls(sources, []) == []


class TestJoinUrl:
    """Tests pour join_url()."""

    @pytest.mark.parametrize(
        "base,relative",
        [
            ("http://server/movies", "poster.jpg"),
            ("http://server/movies/", "poster.jpg"),
            ("http://server/movies/", "/poster.jpg"),
        ],
    )
    def test_single_slash(self, base, relative):
        assert join_url(base, relative) == "http://server/movies/poster.jpg"
