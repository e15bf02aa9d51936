"""
Tests unitaires pour ArtworkDiscoveryService.

Verifie:
- Reconnaissance des posters et backdrops par nom de fichier
- Tri par numero d'ordre (0 si absent), stable
- Sensibilite a la casse et sonde memorisee
"""

from pathlib import Path

import pytest

from cinemeta.core.entities.metadata import ImageType
from cinemeta.core.errors import InvalidImageTypeError
from cinemeta.services import artwork_discovery
from cinemeta.services.artwork_discovery import (
    ArtworkDiscoveryService,
    build_image_pattern,
    file_system_is_case_sensitive,
)


def touch_all(folder: Path, *names: str) -> None:
    for name in names:
        (folder / name).write_bytes(b"")


@pytest.fixture
def discovery() -> ArtworkDiscoveryService:
    return ArtworkDiscoveryService(case_sensitive=True)


@pytest.fixture
def video(tmp_path: Path) -> Path:
    path = tmp_path / "Avatar.mkv"
    path.write_bytes(b"")
    return path


class TestFindPosterPaths:

    def test_numbered_posters_in_order(self, discovery, video):
        touch_all(video.parent, "Avatar.jpg", "Avatar-2.jpg", "Avatar-1.jpg")

        posters = discovery.find_poster_paths(video)

        assert [p.name for p in posters] == ["Avatar.jpg", "Avatar-1.jpg", "Avatar-2.jpg"]

    def test_generic_poster_names(self, discovery, video):
        touch_all(video.parent, "folder.png", "cover.jpeg", "poster-3.jpg", "random.jpg")

        posters = discovery.find_poster_paths(video)

        assert {p.name for p in posters} == {"folder.png", "cover.jpeg", "poster-3.jpg"}
        assert posters[-1].name == "poster-3.jpg"

    def test_backdrops_are_not_posters(self, discovery, video):
        touch_all(video.parent, "fanart.jpg", "Avatar-backdrop.jpg")
        assert discovery.find_poster_paths(video) == []

    def test_other_video_images_ignored(self, discovery, video):
        touch_all(video.parent, "Avatar 2.jpg", "Aliens.jpg", "Avatar.gif")
        assert discovery.find_poster_paths(video) == []

    def test_video_name_matched_literally(self, discovery, tmp_path):
        video = tmp_path / "Alien (1979).mkv"
        touch_all(tmp_path, "Alien (1979).jpg", "Alien 1979.jpg")

        posters = discovery.find_poster_paths(video)

        assert [p.name for p in posters] == ["Alien (1979).jpg"]


class TestFindBackdropPaths:

    def test_generic_and_prefixed_backdrops(self, discovery, video):
        touch_all(
            video.parent,
            "fanart.jpg",
            "Avatar-backdrop-2.jpg",
            "background-1.png",
            "art.jpeg",
        )

        backdrops = discovery.find_backdrop_paths(video)

        assert [p.name for p in backdrops] == [
            "fanart.jpg",
            "art.jpeg",
            "background-1.png",
            "Avatar-backdrop-2.jpg",
        ]

    def test_posters_are_not_backdrops(self, discovery, video):
        touch_all(video.parent, "Avatar.jpg", "poster.jpg")
        assert discovery.find_backdrop_paths(video) == []

    def test_missing_directory(self, discovery, tmp_path):
        assert discovery.find_backdrop_paths(tmp_path / "nowhere" / "Avatar.mkv") == []


class TestImageListing:

    def test_grouped_by_extension_then_name(self, discovery, video):
        touch_all(video.parent, "b.png", "b.jpg", "a.jpeg", "a.jpg", "notes.txt")

        images = discovery.get_images_in_file_directory(video)

        assert [p.name for p in images] == ["a.jpg", "b.jpg", "a.jpeg", "b.png"]

    def test_sort_is_stable_for_equal_order(self, discovery):
        paths = [Path("poster.jpg"), Path("folder.jpg"), Path("cover-1.jpg"), Path("movie.jpg")]

        result = discovery.filter_and_sort_image_paths("Avatar", paths, ImageType.POSTER)

        assert [p.name for p in result] == ["poster.jpg", "folder.jpg", "movie.jpg", "cover-1.jpg"]

    def test_unknown_image_type_raises(self, discovery):
        with pytest.raises(InvalidImageTypeError):
            discovery.filter_and_sort_image_paths("Avatar", [], "logo")

    def test_invalid_image_type_is_value_error(self):
        with pytest.raises(ValueError):
            build_image_pattern("Avatar", "logo", case_sensitive=True)


class TestCaseSensitivity:

    def test_case_sensitive_matching(self):
        service = ArtworkDiscoveryService(case_sensitive=True)
        paths = [Path("AVATAR.JPG"), Path("Avatar.jpg")]

        result = service.filter_and_sort_image_paths("Avatar", paths, ImageType.POSTER)

        assert result == [Path("Avatar.jpg")]

    def test_case_insensitive_matching(self):
        service = ArtworkDiscoveryService(case_sensitive=False)
        paths = [Path("AVATAR.JPG"), Path("FanArt-1.PNG")]

        posters = service.filter_and_sort_image_paths("Avatar", paths, ImageType.POSTER)
        backdrops = service.filter_and_sort_image_paths("avatar", paths, ImageType.BACKDROP)

        assert posters == [Path("AVATAR.JPG")]
        assert backdrops == [Path("FanArt-1.PNG")]

    def test_probe_is_memoized(self, tmp_path, monkeypatch):
        monkeypatch.setattr(artwork_discovery, "_case_sensitive", None)

        first = file_system_is_case_sensitive(tmp_path)
        # Un dossier inexistant ferait echouer une nouvelle sonde
        second = file_system_is_case_sensitive(tmp_path / "missing")

        assert first is second
        assert list(tmp_path.iterdir()) == []

    def test_service_uses_probe_when_not_forced(self, monkeypatch):
        monkeypatch.setattr(artwork_discovery, "_case_sensitive", False)
        assert ArtworkDiscoveryService().case_sensitive is False
