"""
Comparaison des metadonnees actuelles d'un film avec un enregistrement TMDB.

L'etat actuel est assemble depuis le dossier du film:
- le sidecar movie.json (vide s'il est absent ou illisible)
- poster.jpg s'il existe, expose par son URL locale
- les backdrops du sidecar, plus les fichiers du dossier backdrops/ que le
  sidecar ne reference pas (ajoutes a la main par l'utilisateur)

Aucun appel reseau n'est fait pour l'etat actuel.
"""

from pathlib import Path, PurePosixPath

from loguru import logger

from cinemeta.adapters.sidecar import MovieJsonStore
from cinemeta.core.entities.catalog import CatalogMovie
from cinemeta.core.entities.metadata import Comparison, ImageRecord, MetadataRecord
from cinemeta.core.errors import MovieNotFoundError
from cinemeta.core.ports.repositories import ICatalogRepository
from cinemeta.services.metadata_cache import MetadataCache
from cinemeta.utils.constants import BACKDROP_FOLDER, POSTER_FILENAME
from cinemeta.utils.paths import join_url


def _local_backdrop_records(
    movie_folder: Path, records: list[ImageRecord]
) -> list[ImageRecord]:
    """Enregistrements synthetises pour les backdrops non references du disque."""
    backdrop_folder = movie_folder / BACKDROP_FOLDER
    if not backdrop_folder.is_dir():
        return []
    listed = {PurePosixPath(r.relative_path).name for r in records if r.relative_path}
    return [
        ImageRecord(relative_path=PurePosixPath(BACKDROP_FOLDER, path.name).as_posix())
        for path in sorted(backdrop_folder.iterdir(), key=lambda p: p.name)
        if path.is_file() and path.name not in listed
    ]


class MetadataComparisonService:
    """
    Construit une Comparison {current, incoming} pour revue par l'utilisateur.

    Example:
        service = MetadataComparisonService(catalog, metadata_cache, store)
        comparison = await service.compare(tmdb_id=19995, movie_id=12)
    """

    def __init__(
        self,
        catalog: ICatalogRepository,
        metadata_cache: MetadataCache,
        store: MovieJsonStore,
    ) -> None:
        self._catalog = catalog
        self._metadata_cache = metadata_cache
        self._store = store

    def get_movie(self, movie_id: int) -> CatalogMovie:
        """
        Recupere le film du catalogue.

        Raises:
            MovieNotFoundError: si le film n'existe pas
        """
        movie = self._catalog.get_movie_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie {movie_id} not found in catalog")
        return movie

    def get_current_metadata(self, movie: CatalogMovie) -> MetadataRecord:
        """Assemble les metadonnees actuelles depuis le dossier du film."""
        folder = Path(movie.folder_path)
        metadata = self._store.load(folder) or MetadataRecord()

        if (folder / POSTER_FILENAME).is_file():
            metadata.poster_urls.append(join_url(movie.folder_url, POSTER_FILENAME))

        metadata.backdrops = metadata.backdrops + _local_backdrop_records(
            folder, metadata.backdrops
        )

        for backdrop in metadata.backdrops:
            if backdrop.source_url:
                metadata.backdrop_urls.append(backdrop.source_url)
            elif (folder / backdrop.relative_path).is_file():
                metadata.backdrop_urls.append(join_url(movie.folder_url, backdrop.relative_path))
            else:
                logger.debug(f"Backdrop introuvable ignore: {backdrop.relative_path}")
        return metadata

    async def compare(self, tmdb_id: int, movie_id: int) -> Comparison:
        """
        Compare l'etat actuel du film avec l'enregistrement TMDB.

        Args:
            tmdb_id: ID TMDB de l'enregistrement entrant
            movie_id: ID de catalogue du film actuel

        Raises:
            MovieNotFoundError: si le film n'existe pas
            RemoteUnavailableError: si TMDB reste indisponible
        """
        movie = self.get_movie(movie_id)
        current = self.get_current_metadata(movie)
        incoming = await self._metadata_cache.fetch(tmdb_id)
        return Comparison(current=current, incoming=incoming)
