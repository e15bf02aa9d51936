"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- api/ : Client TMDB, cache des recherches, retry, porte single-flight
- cli/ : Interface ligne de commande (Typer)

Modules :
- image_downloader : Telechargement des illustrations (httpx)
- sidecar : Fichier movie.json d'un dossier de film
- library_reprocessor : Collaborateur de re-scan
"""

from cinemeta.adapters.image_downloader import HttpImageDownloader
from cinemeta.adapters.library_reprocessor import LoggingLibraryReprocessor
from cinemeta.adapters.sidecar import MovieJsonStore

__all__ = [
    "HttpImageDownloader",
    "LoggingLibraryReprocessor",
    "MovieJsonStore",
]
