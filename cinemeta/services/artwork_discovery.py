"""
Decouverte des illustrations locales d'une video.

Les posters et backdrops vivent a cote du fichier video et sont reconnus
par leur nom:

- poster : ``<video>.jpg``, ``cover``, ``default``, ``folder``, ``movie``,
  ``poster`` (ex: "Avatar.jpg", "Avatar-1.jpg", "folder.png")
- backdrop : ``art``, ``backdrop``, ``background``, ``fanart``, optionnellement
  prefixes par ``<video>-`` (ex: "fanart.jpg", "Avatar-backdrop-2.jpg")

Le suffixe numerique ``-N`` donne l'ordre d'affichage (0 si absent).
La comparaison des noms suit la sensibilite a la casse du systeme de
fichiers, mesuree une seule fois par processus.
"""

import re
import tempfile
import uuid
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from cinemeta.core.entities.metadata import ImageType
from cinemeta.core.errors import InvalidImageTypeError
from cinemeta.utils.constants import (
    BACKDROP_BASE_NAMES,
    IMAGE_EXTENSIONS,
    POSTER_BASE_NAMES,
)

# Resultat memorise de la sonde, valable pour toute la vie du processus
_case_sensitive: Optional[bool] = None


def file_system_is_case_sensitive(probe_dir: Optional[Path] = None) -> bool:
    """
    Determine si le systeme de fichiers distingue la casse.

    Cree un fichier temporaire au nom en minuscules puis verifie si le meme
    nom en majuscules existe. Le resultat est memorise pour le processus.
    """
    global _case_sensitive
    if _case_sensitive is None:
        directory = Path(probe_dir or tempfile.gettempdir())
        probe = directory / f"cinemeta-{uuid.uuid4().hex}".lower()
        probe.touch()
        try:
            _case_sensitive = not probe.with_name(probe.name.upper()).exists()
        finally:
            probe.unlink()
        logger.debug("Sensibilite a la casse mesuree", case_sensitive=_case_sensitive)
    return _case_sensitive


def _extensions_pattern() -> str:
    return "|".join(ext.lstrip(".") for ext in IMAGE_EXTENSIONS)


def build_image_pattern(
    video_file_name: str, image_type: ImageType, case_sensitive: bool
) -> re.Pattern[str]:
    """
    Construit l'expression reguliere des noms d'images d'un type.

    Le groupe 1 capture le numero d'ordre optionnel.

    Raises:
        InvalidImageTypeError: si ``image_type`` n'est pas un ImageType connu
    """
    name = re.escape(video_file_name)
    extensions = _extensions_pattern()
    if image_type is ImageType.POSTER:
        bases = "|".join([name, *POSTER_BASE_NAMES])
        pattern = rf"^(?:{bases})(?:-(\d+))?\.(?:{extensions})$"
    elif image_type is ImageType.BACKDROP:
        bases = "|".join(BACKDROP_BASE_NAMES)
        pattern = rf"^(?:(?:{name}-)?(?:{bases}))(?:-(\d+))?\.(?:{extensions})$"
    else:
        raise InvalidImageTypeError(f"Unknown image type: {image_type!r}")
    return re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)


class ArtworkDiscoveryService:
    """
    Service de decouverte des posters et backdrops presents sur disque.

    Example:
        discovery = ArtworkDiscoveryService()
        posters = discovery.find_poster_paths(Path("/movies/Avatar/Avatar.mkv"))
    """

    def __init__(self, case_sensitive: Optional[bool] = None) -> None:
        """
        Args:
            case_sensitive: Force la sensibilite a la casse (sinon sondee)
        """
        self._case_sensitive = case_sensitive

    @property
    def case_sensitive(self) -> bool:
        """Sensibilite a la casse utilisee pour comparer les noms."""
        if self._case_sensitive is None:
            return file_system_is_case_sensitive()
        return self._case_sensitive

    def get_images_in_file_directory(self, file_path: Path) -> list[Path]:
        """
        Liste les images (.jpg, .jpeg, .png) du dossier d'un fichier.

        Les images sont regroupees par extension dans cet ordre, puis triees
        par nom a l'interieur d'un groupe.
        """
        directory = Path(file_path).parent
        if not directory.is_dir():
            return []
        files = [p for p in directory.iterdir() if p.is_file()]
        images: list[Path] = []
        for extension in IMAGE_EXTENSIONS:
            images.extend(
                sorted(
                    (p for p in files if p.suffix.lower() == extension),
                    key=lambda p: p.name,
                )
            )
        return images

    def filter_and_sort_image_paths(
        self,
        video_file_name: str,
        image_paths: Iterable[Path],
        image_type: ImageType,
    ) -> list[Path]:
        """
        Garde les images du type demande et les trie par numero d'ordre.

        Le tri est stable: a numero egal, l'ordre de ``image_paths`` est garde.

        Args:
            video_file_name: Nom de la video sans extension
            image_paths: Chemins candidats
            image_type: ImageType.POSTER ou ImageType.BACKDROP

        Raises:
            InvalidImageTypeError: si le type est inconnu
        """
        pattern = build_image_pattern(video_file_name, image_type, self.case_sensitive)
        results: list[tuple[Path, int]] = []
        for image_path in image_paths:
            match = pattern.match(Path(image_path).name)
            if match:
                order = int(match.group(1)) if match.group(1) else 0
                results.append((Path(image_path), order))
        results.sort(key=lambda item: item[1])
        return [path for path, _ in results]

    def find_poster_paths(self, video_path: Path) -> list[Path]:
        """Posters de la video, dans l'ordre d'affichage."""
        video_path = Path(video_path)
        return self.filter_and_sort_image_paths(
            video_path.stem,
            self.get_images_in_file_directory(video_path),
            ImageType.POSTER,
        )

    def find_backdrop_paths(self, video_path: Path) -> list[Path]:
        """Backdrops de la video, dans l'ordre d'affichage."""
        video_path = Path(video_path)
        return self.filter_and_sort_image_paths(
            video_path.stem,
            self.get_images_in_file_directory(video_path),
            ImageType.BACKDROP,
        )
