"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports client API :
- IMetadataProvider : Fournisseur de metadonnees (TMDB)
- IImageDownloader : Telechargement des illustrations

Ports catalogue :
- ICatalogRepository : Lecture des films et des sources
- ILibraryReprocessor : Re-scan apres sauvegarde
"""

from cinemeta.core.ports.api_clients import IImageDownloader, IMetadataProvider
from cinemeta.core.ports.repositories import ICatalogRepository, ILibraryReprocessor

__all__ = [
    "IMetadataProvider",
    "IImageDownloader",
    "ICatalogRepository",
    "ILibraryReprocessor",
]
