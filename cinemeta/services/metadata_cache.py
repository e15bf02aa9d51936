"""
Cache disque des metadonnees TMDB avec politique de fraicheur.

MetadataCache sert un enregistrement depuis ``<cache_dir>/<tmdb_id>.json``
tant que le fichier a moins de 30 jours. Sinon (absent, perime ou
corrompu), il interroge TMDB a travers la porte single-flight, ecrase le
fichier de cache avec le JSON brut, puis projette le resultat.

Les recherches par texte passent par la meme porte et sont conservees 24h
dans l'APICache (diskcache).
"""

import time
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from cinemeta.adapters.api.cache import APICache
from cinemeta.adapters.api.gate import RemoteGate
from cinemeta.core.entities.metadata import MetadataRecord, MovieSearchResult
from cinemeta.core.errors import CacheCorruptError
from cinemeta.core.ports.api_clients import IMetadataProvider
from cinemeta.services.metadata_projection import (
    project_search_result,
    project_tmdb_movie,
)
from cinemeta.utils.constants import METADATA_CACHE_MAX_AGE_DAYS
from cinemeta.utils.json_files import read_json_object, write_json_atomic

SECONDS_PER_DAY = 24 * 60 * 60


class MetadataCache:
    """
    Acces cache-first aux metadonnees TMDB d'un film.

    Attributes:
        MAX_AGE_DAYS: Fenetre de fraicheur par defaut d'un fichier de cache

    Example:
        cache = MetadataCache(provider=tmdb, gate=RemoteGate(), cache_dir=Path(".cache/tmdb"))
        record = await cache.fetch(27205)
        print(record.title, record.rating)
    """

    MAX_AGE_DAYS = METADATA_CACHE_MAX_AGE_DAYS

    def __init__(
        self,
        provider: IMetadataProvider,
        gate: RemoteGate,
        cache_dir: Path,
        search_cache: Optional[APICache] = None,
        max_age_days: float = MAX_AGE_DAYS,
        region: str = "US",
        image_language: str = "en",
    ) -> None:
        """
        Initialise le cache.

        Args:
            provider: Fournisseur de metadonnees (TMDBClient)
            gate: Porte single-flight partagee par tout le processus
            cache_dir: Repertoire des fichiers ``<tmdb_id>.json``
            search_cache: Cache des recherches (optionnel)
            max_age_days: Fenetre de fraicheur en jours
            region: Region des certifications et titres alternatifs
            image_language: Langue des illustrations retenues
        """
        self._provider = provider
        self._gate = gate
        self._cache_dir = Path(cache_dir)
        self._search_cache = search_cache
        self._max_age_seconds = max_age_days * SECONDS_PER_DAY
        self._region = region
        self._image_language = image_language

    def cache_path(self, tmdb_id: int) -> Path:
        """Chemin deterministe du fichier de cache d'un identifiant."""
        return self._cache_dir / f"{tmdb_id}.json"

    def _is_fresh(self, path: Path) -> bool:
        try:
            age = time.time() - path.stat().st_mtime
        except FileNotFoundError:
            return False
        return age < self._max_age_seconds

    def _read_cached(self, tmdb_id: int) -> Optional[dict[str, Any]]:
        """Retourne le JSON brut en cache s'il est frais et lisible, sinon None."""
        path = self.cache_path(tmdb_id)
        if not self._is_fresh(path):
            return None
        try:
            return read_json_object(path)
        except FileNotFoundError:
            return None
        except CacheCorruptError as e:
            logger.warning(f"Cache TMDB corrompu, nouvelle recuperation: {e}")
            return None

    async def fetch_raw(self, tmdb_id: int) -> dict[str, Any]:
        """
        Retourne l'enregistrement brut TMDB, depuis le cache si possible.

        Raises:
            RemoteUnavailableError: si TMDB reste indisponible
            MetadataNotFoundError: si l'identifiant est inconnu de TMDB
        """
        raw = self._read_cached(tmdb_id)
        if raw is not None:
            logger.debug("Cache TMDB utilise", tmdb_id=tmdb_id)
            return raw

        logger.debug("Cache TMDB absent ou perime", tmdb_id=tmdb_id)
        return await self._refresh(tmdb_id)

    async def _refresh(self, tmdb_id: int) -> dict[str, Any]:
        """Interroge TMDB a travers la porte et reecrit le fichier de cache."""
        async with self._gate:
            raw = await self._provider.get_movie(tmdb_id)

        write_json_atomic(self.cache_path(tmdb_id), raw)
        return raw

    async def fetch(self, tmdb_id: int) -> MetadataRecord:
        """
        Retourne l'enregistrement normalise d'un film TMDB.

        Args:
            tmdb_id: ID TMDB du film

        Returns:
            MetadataRecord projete (sans enregistrements d'images)
        """
        raw = self._read_cached(tmdb_id)
        if raw is not None:
            try:
                return self._project(raw)
            except (AttributeError, TypeError, KeyError, ValueError) as e:
                # JSON valide mais de forme inattendue: traite comme absent
                logger.warning(f"Cache TMDB invalide pour {tmdb_id}, nouvelle recuperation: {e!r}")

        return self._project(await self._refresh(tmdb_id))

    def _project(self, raw: dict[str, Any]) -> MetadataRecord:
        return project_tmdb_movie(
            raw,
            self._provider.image_url,
            region=self._region,
            image_language=self._image_language,
        )

    async def search(self, text: str) -> list[MovieSearchResult]:
        """
        Recherche des films TMDB par texte.

        Les resultats sont caches 24h quand un cache de recherche est fourni.
        """
        cache_key = f"tmdb:search:{text}"
        if self._search_cache is not None:
            cached = await self._search_cache.get(cache_key)
            if cached is not None:
                return cached

        async with self._gate:
            items = await self._provider.search_movies(text)

        results = [
            project_search_result(item, self._provider.image_url)
            for item in items
            if item.get("id") is not None
        ]
        if self._search_cache is not None:
            await self._search_cache.set_search(cache_key, results)
        return results
