"""
Implementation SQLModel du repository catalogue.

Implemente ICatalogRepository en lecture seule. L'URL publique du dossier
d'un film est calculee a partir des sources configurees.
"""

from pathlib import Path
from typing import Optional

from sqlmodel import Session, select

from cinemeta.core.entities.catalog import CatalogMovie, Source
from cinemeta.core.ports.repositories import ICatalogRepository
from cinemeta.infrastructure.persistence.models import MovieModel, SourceModel
from cinemeta.utils.paths import path_to_url


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel du catalogue.

    Convertit SourceModel et MovieModel (persistance) en Source et
    CatalogMovie (domaine).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    @staticmethod
    def _source_to_entity(model: SourceModel) -> Source:
        return Source(id=model.id, folder_path=Path(model.folder_path), url=model.url)

    def list_sources(self) -> list[Source]:
        """Liste les sources configurees, par ID."""
        statement = select(SourceModel).order_by(SourceModel.id)
        return [self._source_to_entity(m) for m in self._session.exec(statement).all()]

    def get_movie_by_id(self, movie_id: int) -> Optional[CatalogMovie]:
        """
        Recupere un film par son ID.

        Raises :
            UnknownSourceError : si aucune source ne contient le dossier du film
        """
        model = self._session.get(MovieModel, movie_id)
        if model is None:
            return None

        sources = self.list_sources()
        if model.source_id is not None:
            # La source declaree est essayee en premier
            sources.sort(key=lambda s: s.id != model.source_id)

        folder_url = path_to_url(sources, model.folder_path)
        return CatalogMovie(
            id=model.id,
            folder_path=Path(model.folder_path),
            folder_url=folder_url.rstrip("/") + "/",
            source_id=model.source_id,
        )
