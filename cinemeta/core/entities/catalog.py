"""
Catalog entities.

Read-only views of the movie catalog used to locate a movie folder and
map local files to public URLs.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Source:
    """
    A configured media root.

    Attributes:
        id: Catalog ID of the source
        folder_path: Root folder on disk
        url: Public URL under which the folder content is served
    """

    id: Optional[int]
    folder_path: Path
    url: str


@dataclass(frozen=True)
class CatalogMovie:
    """
    A movie known by the catalog.

    Attributes:
        id: Catalog ID
        folder_path: Folder holding the video, its artwork and movie.json
        folder_url: Public URL of the folder
        source_id: ID of the Source containing the folder
    """

    id: int
    folder_path: Path
    folder_url: str
    source_id: Optional[int] = None
