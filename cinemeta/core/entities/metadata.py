"""
Metadata entities.

Entities describing a movie's normalized metadata, its artwork records
and the transient objects returned to callers (comparison, search result).
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class ImageType(Enum):
    """Type d'illustration reconnu par la decouverte locale."""

    POSTER = "poster"
    BACKDROP = "backdrop"


@dataclass
class ImageRecord:
    """
    One artwork asset as persisted in the sidecar file.

    Attributes:
        relative_path: Path relative to the movie folder (posix separators)
        source_url: Remote origin of the asset

    A record with only a relative_path is a manually added local asset.
    A record with only a source_url is a pending download and is never
    persisted in that state.
    """

    relative_path: Optional[str] = None
    source_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.relative_path and not self.source_url:
            raise ValueError("ImageRecord requires a relative_path or a source_url")

    @property
    def is_pending(self) -> bool:
        """True tant que l'image n'a pas de fichier local."""
        return not self.relative_path


@dataclass
class CastMember:
    """Actor credit."""

    name: str
    character: Optional[str] = None
    tmdb_id: Optional[int] = None


@dataclass
class CrewMember:
    """Crew credit."""

    name: str
    job: Optional[str] = None
    tmdb_id: Optional[int] = None


@dataclass
class MetadataRecord:
    """
    Normalized movie metadata.

    Built fresh per request, either projected from a raw TMDB record or
    loaded from the movie's sidecar file.

    Attributes:
        tmdb_id: The Movie Database ID
        title: Main title
        titles: Main title followed by regional alternate titles (no duplicates)
        summary: Short summary
        description: Long description
        collection: Name of the collection the movie belongs to
        genres: Genre names (ordered, no duplicates)
        keywords: Keyword tags (ordered, no duplicates)
        runtime: Runtime in minutes
        rating: Earliest regional certification (ex: "PG-13")
        release_date: Release date matching the rating entry
        cast: Ordered cast credits
        crew: Ordered crew credits
        poster_urls: Candidate poster URLs, the first one is materialized
        backdrop_urls: Candidate backdrop URLs, highest rated first
        backdrops: Persisted backdrop records, in display order
        poster: Persisted poster record
    """

    tmdb_id: Optional[int] = None
    title: str = ""
    titles: list[str] = field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    collection: Optional[str] = None
    genres: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    runtime: Optional[int] = None
    rating: Optional[str] = None
    release_date: Optional[date] = None
    cast: list[CastMember] = field(default_factory=list)
    crew: list[CrewMember] = field(default_factory=list)
    poster_urls: list[str] = field(default_factory=list)
    backdrop_urls: list[str] = field(default_factory=list)
    backdrops: list[ImageRecord] = field(default_factory=list)
    poster: Optional[ImageRecord] = None


@dataclass
class Comparison:
    """Current metadata of a movie side by side with an incoming TMDB record."""

    current: MetadataRecord
    incoming: MetadataRecord


@dataclass
class MovieSearchResult:
    """
    Resultat de recherche TMDB par texte.

    Attributes:
        title: Titre du film
        poster_url: URL complete du poster (None si TMDB n'en a pas)
        tmdb_id: ID TMDB
        overview: Resume
        release_date: Date de sortie
    """

    title: str
    tmdb_id: int
    poster_url: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
