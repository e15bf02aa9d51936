"""
Business entities representing core domain concepts.

Exports:
- MetadataRecord: Normalized movie metadata
- ImageRecord: Persisted artwork reference
- CastMember / CrewMember: Credits
- Comparison: Current vs incoming metadata
- MovieSearchResult: TMDB text search result
- ImageType: Poster or backdrop
- Source / CatalogMovie: Read-only catalog views
"""

from cinemeta.core.entities.catalog import CatalogMovie, Source
from cinemeta.core.entities.metadata import (
    CastMember,
    Comparison,
    CrewMember,
    ImageRecord,
    ImageType,
    MetadataRecord,
    MovieSearchResult,
)

__all__ = [
    "CastMember",
    "CatalogMovie",
    "Comparison",
    "CrewMember",
    "ImageRecord",
    "ImageType",
    "MetadataRecord",
    "MovieSearchResult",
    "Source",
]
