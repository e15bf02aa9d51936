"""
Utilitaires de chemins et d'URLs publiques.

Une source configuree associe un dossier racine a une URL publique :
tout fichier contenu dans ce dossier est expose sous
``{source.url}/{chemin relatif au dossier}``.
"""

import os
from pathlib import Path
from typing import Iterable

from cinemeta.core.entities.catalog import Source
from cinemeta.core.errors import UnknownSourceError


def normalize_path(path: str, is_file: bool) -> str:
    """
    Uniformise les separateurs d'un chemin.

    Les ``\\`` et ``/`` sont remplaces par le separateur du systeme. Un
    chemin de dossier se termine toujours par un separateur.
    """
    path = path.replace("\\", os.sep).replace("/", os.sep)
    if not is_file and not path.endswith(os.sep):
        path += os.sep
    return path


def _absolute(path: str | Path) -> Path:
    return Path(os.path.abspath(os.fspath(path)))


def is_contained_by_directory(child_path: str | Path, parent_path: str | Path) -> bool:
    """
    Verifie si ``parent_path`` est un ancetre de ``child_path``.

    Remonte la chaine des parents du chemin enfant : ``/media/movies2``
    n'est pas contenu par ``/media/movies``, contrairement a une simple
    comparaison de prefixe. Un dossier ne se contient pas lui-meme.
    """
    parent = _absolute(parent_path)
    return parent in _absolute(child_path).parents


def join_url(base_url: str, relative: str) -> str:
    """Concatene une URL de base et un chemin relatif avec un seul ``/``."""
    return f"{base_url.rstrip('/')}/{relative.lstrip('/')}"


def path_to_url(sources: Iterable[Source], file_path: str | Path) -> str:
    """
    Convertit un chemin local en URL publique.

    Args:
        sources: Sources configurees
        file_path: Chemin du fichier ou dossier a exposer

    Returns:
        URL publique du chemin

    Raises:
        UnknownSourceError: si aucune source ne contient le chemin
    """
    for source in sources:
        if is_contained_by_directory(file_path, source.folder_path):
            relative = _absolute(file_path).relative_to(_absolute(source.folder_path))
            return join_url(source.url, relative.as_posix())
    raise UnknownSourceError(f'Unable to determine source for "{file_path}"')


def convert_paths_into_urls(
    sources: Iterable[Source], file_paths: Iterable[str | Path]
) -> list[str]:
    """Convertit une liste de chemins en URLs publiques (meme ordre)."""
    sources = list(sources)
    return [path_to_url(sources, file_path) for file_path in file_paths]
