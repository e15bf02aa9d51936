"""
Interfaces ports pour le catalogue et la bibliotheque.

Le catalogue des films est gere a l'exterieur de ce package : le domaine
n'en a besoin qu'en lecture, et notifie la bibliotheque apres une sauvegarde.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from cinemeta.core.entities.catalog import CatalogMovie, Source


class ICatalogRepository(ABC):
    """
    Interface de lecture du catalogue.

    Definit les operations pour retrouver un film et les sources configurees.
    """

    @abstractmethod
    def get_movie_by_id(self, movie_id: int) -> Optional[CatalogMovie]:
        """Recupere un film par son ID de catalogue."""
        ...

    @abstractmethod
    def list_sources(self) -> list[Source]:
        """Liste les sources de medias configurees."""
        ...


class ILibraryReprocessor(ABC):
    """Collaborateur de re-scan invoque apres une sauvegarde reussie."""

    @abstractmethod
    async def reprocess(self, folder_path: Path) -> None:
        """Demande le retraitement du dossier de film."""
        ...
