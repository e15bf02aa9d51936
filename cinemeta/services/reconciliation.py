"""
Reconciliation des illustrations d'un dossier de film.

A partir de la liste ordonnee des URLs souhaitees, AssetReconciler produit
la nouvelle liste d'ImageRecord en:

1. reprenant tel quel un enregistrement existant dont la source est la meme
   URL et dont le fichier est toujours present
2. transformant une URL qui pointe deja vers le dossier du film (notre
   propre serveur) en simple chemin relatif, sans telechargement
3. telechargeant les autres URLs, une par une, dans un dossier temporaire

Les fichiers ne sont deplaces dans le dossier du film qu'une fois tous les
telechargements reussis. Le premier echec annule l'appel entier: rien n'est
deplace et les fichiers temporaires sont supprimes.

La liste retournee a toujours la meme longueur et le meme ordre que les
URLs souhaitees.
"""

import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence
from urllib.parse import urlparse

from loguru import logger

from cinemeta.core.entities.metadata import ImageRecord
from cinemeta.core.errors import DownloadError
from cinemeta.core.ports.api_clients import IImageDownloader
from cinemeta.utils.constants import BACKDROP_FOLDER, POSTER_FILENAME


@dataclass
class _StagedDownload:
    """Telechargement en attente de deplacement vers le dossier du film."""

    url: str
    staging_path: Path
    destination_name: str


def _extension_of(url: str) -> str:
    return PurePosixPath(urlparse(url).path).suffix


def _move(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.replace(source, destination)
    except OSError:
        # Dossier temporaire sur un autre systeme de fichiers
        shutil.move(str(source), str(destination))


class AssetReconciler:
    """
    Moteur de reconciliation des posters et backdrops.

    Les appels pour un meme film ne doivent pas etre concurrents: aucun
    verrou par film n'est pris ici.

    Example:
        reconciler = AssetReconciler(downloader, temp_dir=Path("/tmp/cinemeta"))
        records = await reconciler.reconcile(
            current_records=sidecar.backdrops,
            desired_urls=metadata.backdrop_urls,
            movie_folder=Path("/movies/Avatar"),
            movie_folder_url="http://server/movies/Avatar/",
        )
    """

    def __init__(self, downloader: IImageDownloader, temp_dir: Path) -> None:
        """
        Args:
            downloader: Adaptateur de telechargement
            temp_dir: Dossier des fichiers en cours de telechargement
        """
        self._downloader = downloader
        self._temp_dir = Path(temp_dir)

    @staticmethod
    def relative_path_from_url(url: str, movie_folder_url: str) -> Optional[str]:
        """
        Retourne le chemin relatif si ``url`` pointe dans le dossier du film.

        La comparaison du prefixe ignore la casse. Retourne None pour une URL
        externe ou pour l'URL du dossier lui-meme.
        """
        base = movie_folder_url.rstrip("/") + "/"
        if not url.lower().startswith(base.lower()):
            return None
        return url[len(base):] or None

    @staticmethod
    def _reusable(
        url: str, current_records: Sequence[ImageRecord], movie_folder: Path
    ) -> Optional[ImageRecord]:
        for record in current_records:
            if record.source_url != url or not record.relative_path:
                continue
            if (movie_folder / record.relative_path).is_file():
                return record
        return None

    def _resolve(
        self,
        url: str,
        current_records: Sequence[ImageRecord],
        movie_folder: Path,
        movie_folder_url: str,
    ) -> ImageRecord:
        """Enregistrement pour une URL, en attente de telechargement si besoin."""
        relative_path = self.relative_path_from_url(url, movie_folder_url)
        if relative_path is not None:
            return ImageRecord(relative_path=relative_path)
        existing = self._reusable(url, current_records, movie_folder)
        if existing is not None:
            return existing
        return ImageRecord(source_url=url)

    async def _stage(self, url: str, destination_name: Optional[str] = None) -> _StagedDownload:
        staging_name = f"{uuid.uuid4().hex}{_extension_of(url)}"
        staging_path = self._temp_dir / staging_name
        self._temp_dir.mkdir(parents=True, exist_ok=True)
        try:
            await self._downloader.download(url, staging_path)
        except DownloadError:
            staging_path.unlink(missing_ok=True)
            raise
        return _StagedDownload(url, staging_path, destination_name or staging_name)

    async def _stage_all(self, urls: Sequence[str]) -> list[_StagedDownload]:
        """Telecharge chaque URL sequentiellement; annule tout au premier echec."""
        staged: list[_StagedDownload] = []
        try:
            for url in urls:
                staged.append(await self._stage(url))
        except DownloadError:
            for item in staged:
                item.staging_path.unlink(missing_ok=True)
            logger.error(f"Reconciliation annulee, {len(staged)} telechargement(s) abandonne(s)")
            raise
        return staged

    async def reconcile(
        self,
        current_records: Sequence[ImageRecord],
        desired_urls: Sequence[str],
        movie_folder: Path,
        movie_folder_url: str,
        subfolder: str = BACKDROP_FOLDER,
    ) -> list[ImageRecord]:
        """
        Reconcilie une liste d'illustrations (backdrops).

        Args:
            current_records: Enregistrements persistes precedemment
            desired_urls: URLs souhaitees, dans l'ordre d'affichage
            movie_folder: Dossier du film
            movie_folder_url: URL publique du dossier du film
            subfolder: Sous-dossier de destination des nouveaux fichiers

        Returns:
            Un ImageRecord par URL souhaitee, dans le meme ordre

        Raises:
            DownloadError: si un telechargement echoue (rien n'est deplace)
        """
        movie_folder = Path(movie_folder)
        records = [
            self._resolve(url, current_records, movie_folder, movie_folder_url)
            for url in desired_urls
        ]

        # Une URL repetee n'est telechargee qu'une fois
        pending_urls = list(dict.fromkeys(r.source_url for r in records if r.is_pending))
        if not pending_urls:
            logger.debug("Aucune illustration a telecharger", folder=str(movie_folder))
            return records

        staged = await self._stage_all(pending_urls)

        relative_paths: dict[str, str] = {}
        destination_folder = movie_folder / subfolder
        for item in staged:
            _move(item.staging_path, destination_folder / item.destination_name)
            relative_paths[item.url] = PurePosixPath(subfolder, item.destination_name).as_posix()
        logger.info(
            f"{len(staged)} illustration(s) telechargee(s) dans {destination_folder}"
        )

        return [
            ImageRecord(relative_path=relative_paths[r.source_url], source_url=r.source_url)
            if r.is_pending
            else r
            for r in records
        ]

    async def reconcile_poster(
        self,
        current_poster: Optional[ImageRecord],
        poster_urls: Sequence[str],
        movie_folder: Path,
        movie_folder_url: str,
    ) -> Optional[ImageRecord]:
        """
        Reconcilie le poster unique du film (``poster.jpg``).

        Seule la premiere URL est materialisee. Sans URL, le poster existant
        est supprime.

        Returns:
            L'enregistrement du poster, ou None s'il n'y a plus de poster
        """
        movie_folder = Path(movie_folder)
        poster_path = movie_folder / POSTER_FILENAME

        if not poster_urls:
            if poster_path.exists():
                poster_path.unlink()
                logger.info(f"Poster supprime: {poster_path}")
            return None

        current = [current_poster] if current_poster else []
        record = self._resolve(poster_urls[0], current, movie_folder, movie_folder_url)
        if not record.is_pending:
            local_file = movie_folder / record.relative_path
            if not local_file.is_file():
                logger.warning(f"Poster local introuvable, poster conserve: {local_file}")
                return current_poster if poster_path.is_file() else None
            if record.relative_path != POSTER_FILENAME:
                # Image locale choisie comme poster
                shutil.copyfile(local_file, poster_path)
                return ImageRecord(relative_path=POSTER_FILENAME, source_url=record.source_url)
            if record.source_url is None and current_poster is not None:
                # Auto-reference a poster.jpg: l'origine persistee est conservee
                return ImageRecord(
                    relative_path=POSTER_FILENAME, source_url=current_poster.source_url
                )
            return record

        staged = await self._stage(record.source_url, POSTER_FILENAME)
        _move(staged.staging_path, poster_path)
        logger.info(f"Poster telecharge: {poster_path}")
        return ImageRecord(relative_path=POSTER_FILENAME, source_url=record.source_url)
