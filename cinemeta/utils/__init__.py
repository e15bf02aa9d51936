"""
Utilitaires et constantes pour Cinemeta.

Ce module contient les constantes, les utilitaires de chemins/URLs et
l'acces aux documents JSON sur disque.
"""

from cinemeta.utils.paths import (
    convert_paths_into_urls,
    is_contained_by_directory,
    join_url,
    normalize_path,
    path_to_url,
)

__all__ = [
    "convert_paths_into_urls",
    "is_contained_by_directory",
    "join_url",
    "normalize_path",
    "path_to_url",
]
