"""
Sauvegarde des metadonnees d'un film.

Orchestration d'une sauvegarde:
1. lecture du film dans le catalogue et du sidecar persiste
2. reconciliation du poster puis des backdrops
3. reecriture complete du sidecar
4. demande de retraitement du dossier a la bibliotheque

Si une etape echoue (telechargement notamment), le sidecar n'est pas
modifie et la bibliotheque n'est pas notifiee.
"""

from dataclasses import replace
from pathlib import Path

from loguru import logger

from cinemeta.adapters.sidecar import MovieJsonStore
from cinemeta.core.entities.metadata import MetadataRecord
from cinemeta.core.errors import MovieNotFoundError
from cinemeta.core.ports.repositories import ICatalogRepository, ILibraryReprocessor
from cinemeta.services.reconciliation import AssetReconciler


class MetadataSaveService:
    """
    Applique un MetadataRecord choisi par l'utilisateur a un dossier de film.

    Deux sauvegardes du meme film ne doivent pas etre lancees en parallele.
    """

    def __init__(
        self,
        catalog: ICatalogRepository,
        store: MovieJsonStore,
        reconciler: AssetReconciler,
        reprocessor: ILibraryReprocessor,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._reconciler = reconciler
        self._reprocessor = reprocessor

    async def download_metadata(
        self, movie_folder: Path, movie_folder_url: str, metadata: MetadataRecord
    ) -> MetadataRecord:
        """
        Materialise les illustrations et ecrit le sidecar.

        Les enregistrements deja persistes dans le sidecar (et ceux portes par
        ``metadata``) servent a eviter les telechargements inutiles.

        Returns:
            Le MetadataRecord ecrit dans le sidecar
        """
        persisted = self._store.load(movie_folder) or MetadataRecord()
        known_backdrops = persisted.backdrops + [
            b for b in metadata.backdrops if b not in persisted.backdrops
        ]

        poster = await self._reconciler.reconcile_poster(
            persisted.poster or metadata.poster,
            metadata.poster_urls,
            movie_folder,
            movie_folder_url,
        )
        backdrops = await self._reconciler.reconcile(
            known_backdrops,
            metadata.backdrop_urls,
            movie_folder,
            movie_folder_url,
        )

        saved = replace(metadata, poster=poster, backdrops=backdrops)
        self._store.save(movie_folder, saved)
        return saved

    async def save(self, movie_id: int, metadata: MetadataRecord) -> MetadataRecord:
        """
        Sauvegarde les metadonnees d'un film du catalogue.

        Raises:
            MovieNotFoundError: si le film n'existe pas
            DownloadError: si une illustration n'a pas pu etre telechargee
        """
        movie = self._catalog.get_movie_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie {movie_id} not found in catalog")

        folder = Path(movie.folder_path)
        saved = await self.download_metadata(folder, movie.folder_url, metadata)
        logger.info(
            "Metadonnees sauvegardees",
            movie_id=movie_id,
            backdrops=len(saved.backdrops),
        )
        await self._reprocessor.reprocess(folder)
        return saved
