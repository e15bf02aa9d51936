"""
Adaptateur du fichier sidecar movie.json.

Un document JSON par dossier de film, cles en camelCase, qui persiste la
projection MetadataRecord (titres, resume, credits, illustrations).

La conversion entre le document et l'entite est enumeree champ par champ
dans _to_document / _to_record. Les URLs candidates (poster_urls,
backdrop_urls) ne sont pas persistees : elles sont recalculees a chaque
comparaison.
"""

from pathlib import Path
from typing import Any, Optional

from loguru import logger

from cinemeta.core.entities.metadata import (
    CastMember,
    CrewMember,
    ImageRecord,
    MetadataRecord,
)
from cinemeta.core.errors import CacheCorruptError
from cinemeta.utils.constants import SIDECAR_FILENAME
from cinemeta.utils.helpers import parse_iso_date
from cinemeta.utils.json_files import read_json_object, write_json_atomic


def _image_to_document(image: ImageRecord) -> dict[str, Any]:
    return {"path": image.relative_path, "sourceUrl": image.source_url}


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _image_to_record(data: Any) -> Optional[ImageRecord]:
    if not isinstance(data, dict):
        return None
    path = _str_or_none(data.get("path"))
    source_url = _str_or_none(data.get("sourceUrl"))
    if path is None and source_url is None:
        return None
    return ImageRecord(relative_path=path, source_url=source_url)


def _str_list(value: Any) -> list[str]:
    return [item for item in _list(value) if isinstance(item, str)]


def _to_document(record: MetadataRecord) -> dict[str, Any]:
    """Convertit l'entite en document movie.json (cles camelCase)."""
    return {
        "tmdbId": record.tmdb_id,
        "title": record.title,
        "titles": list(record.titles),
        "summary": record.summary,
        "description": record.description,
        "collection": record.collection,
        "genres": list(record.genres),
        "keywords": list(record.keywords),
        "runtime": record.runtime,
        "rating": record.rating,
        "releaseDate": record.release_date.isoformat() if record.release_date else None,
        "cast": [
            {"name": m.name, "character": m.character, "tmdbId": m.tmdb_id}
            for m in record.cast
        ],
        "crew": [
            {"name": m.name, "job": m.job, "tmdbId": m.tmdb_id}
            for m in record.crew
        ],
        "poster": _image_to_document(record.poster) if record.poster else None,
        "backdrops": [_image_to_document(image) for image in record.backdrops],
    }


def _to_record(data: dict[str, Any]) -> MetadataRecord:
    """Convertit un document movie.json en entite (champs invalides ignores)."""
    tmdb_id = data.get("tmdbId")
    runtime = data.get("runtime")
    cast = [
        CastMember(
            name=m["name"],
            character=_str_or_none(m.get("character")),
            tmdb_id=m.get("tmdbId"),
        )
        for m in _list(data.get("cast"))
        if isinstance(m, dict) and _str_or_none(m.get("name"))
    ]
    crew = [
        CrewMember(
            name=m["name"], job=_str_or_none(m.get("job")), tmdb_id=m.get("tmdbId")
        )
        for m in _list(data.get("crew"))
        if isinstance(m, dict) and _str_or_none(m.get("name"))
    ]
    backdrops = [
        image
        for image in (_image_to_record(item) for item in _list(data.get("backdrops")))
        if image is not None
    ]
    return MetadataRecord(
        tmdb_id=tmdb_id if isinstance(tmdb_id, int) else None,
        title=_str_or_none(data.get("title")) or "",
        titles=_str_list(data.get("titles")),
        summary=_str_or_none(data.get("summary")),
        description=_str_or_none(data.get("description")),
        collection=_str_or_none(data.get("collection")),
        genres=_str_list(data.get("genres")),
        keywords=_str_list(data.get("keywords")),
        runtime=runtime if isinstance(runtime, int) else None,
        rating=_str_or_none(data.get("rating")),
        release_date=parse_iso_date(data.get("releaseDate")),
        cast=cast,
        crew=crew,
        poster=_image_to_record(data.get("poster")),
        backdrops=backdrops,
    )


class MovieJsonStore:
    """
    Lecture et ecriture du sidecar movie.json d'un dossier de film.

    Un sidecar absent ou illisible est traite comme absent : la lecture ne
    leve jamais d'exception pour un contenu corrompu.
    """

    def __init__(self, filename: str = SIDECAR_FILENAME) -> None:
        self._filename = filename

    def path_for(self, movie_folder: Path) -> Path:
        """Chemin du sidecar pour un dossier de film."""
        return movie_folder / self._filename

    def load(self, movie_folder: Path) -> Optional[MetadataRecord]:
        """
        Charge le sidecar du dossier.

        Returns:
            L'entite MetadataRecord, ou None si absent ou corrompu
        """
        path = self.path_for(movie_folder)
        try:
            return _to_record(read_json_object(path))
        except FileNotFoundError:
            return None
        except CacheCorruptError as e:
            logger.warning(f"Sidecar ignore: {e}")
            return None

    def save(self, movie_folder: Path, record: MetadataRecord) -> Path:
        """Remplace le sidecar du dossier par la projection de ``record``."""
        path = write_json_atomic(self.path_for(movie_folder), _to_document(record))
        logger.debug(f"Sidecar ecrit: {path}")
        return path
