"""
Modeles SQLModel du catalogue.

Tables:
- sources: Dossiers racines de medias et leur URL publique
- movies: Films, identifies par leur dossier
"""

from sqlmodel import Field, SQLModel


class SourceModel(SQLModel, table=True):
    """Source de medias configuree."""

    __tablename__ = "sources"

    id: int | None = Field(default=None, primary_key=True)
    folder_path: str
    url: str


class MovieModel(SQLModel, table=True):
    """
    Film du catalogue.

    folder_path est le dossier contenant la video, ses illustrations et
    son movie.json.
    """

    __tablename__ = "movies"

    id: int | None = Field(default=None, primary_key=True)
    folder_path: str = Field(index=True)
    source_id: int | None = Field(default=None, foreign_key="sources.id")
