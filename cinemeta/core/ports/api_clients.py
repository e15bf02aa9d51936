"""
Interfaces ports pour les services distants.

Interfaces abstraites (ports) definissant les contrats pour le fournisseur
de metadonnees (TMDB) et le telechargement des illustrations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de metadonnees de films.

    Les implementations retournent le JSON brut du fournisseur : la projection
    vers MetadataRecord est faite par la couche services.
    """

    @abstractmethod
    async def search_movies(self, text: str) -> list[dict[str, Any]]:
        """
        Recherche des films par texte.

        Args :
            text : Texte libre (titre)

        Retourne :
            Liste des resultats bruts, dans l'ordre du fournisseur
        """
        ...

    @abstractmethod
    async def get_movie(self, tmdb_id: int) -> dict[str, Any]:
        """
        Recupere l'enregistrement brut complet d'un film.

        L'enregistrement inclut les sous-ressources : titres alternatifs,
        credits, images, mots-cles, sorties regionales et bandes-annonces.

        Raises :
            RemoteUnavailableError : budget de tentatives epuise
            MetadataNotFoundError : identifiant inconnu
        """
        ...

    @abstractmethod
    def image_url(self, file_path: str) -> str:
        """Construit l'URL absolue d'une image a partir de son chemin fournisseur."""
        ...


class IImageDownloader(ABC):
    """Interface de telechargement d'une illustration vers un fichier local."""

    @abstractmethod
    async def download(self, url: str, destination: Path) -> None:
        """
        Telecharge ``url`` dans ``destination`` (ecrase le fichier existant).

        Raises :
            DownloadError : en cas d'echec reseau ou HTTP
        """
        ...
