"""
Client TMDB pour la recherche et la recuperation des metadonnees de films.

Implemente l'interface IMetadataProvider pour TMDB (The Movie Database).
Le client retourne le JSON brut de l'API : la mise en cache et la
projection sont faites par la couche services. Les echecs transitoires
sont relances via request_with_retry (10 tentatives par defaut).

Usage:
    client = TMDBClient(api_key="your_key")
    results = await client.search_movies("Avatar")
    raw = await client.get_movie(19995)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cinemeta.adapters.api.retry import TransientAPIError, request_with_retry
from cinemeta.core.errors import MetadataNotFoundError, RemoteUnavailableError
from cinemeta.core.ports.api_clients import IMetadataProvider
from cinemeta.utils.constants import (
    REMOTE_MAX_ATTEMPTS,
    TMDB_IMAGE_BASE_URL,
    TMDB_MOVIE_APPENDS,
)


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB pour les metadonnees de films.

    Implemente IMetadataProvider avec:
    - Recherche de films par texte
    - Recuperation d'un film avec toutes ses sous-ressources
    - Retry automatique sur 429, 5xx et erreurs reseau

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBClient(api_key="xxx")
        raw = await client.get_movie(27205)
        print(raw["title"])
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        language: str = "en-US",
        image_language: str = "en",
        image_base_url: str = TMDB_IMAGE_BASE_URL,
        max_attempts: int = REMOTE_MAX_ATTEMPTS,
        max_wait: float = 60,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            language: Langue des textes retournes (ex: "en-US")
            image_language: Langue des images a inclure (en plus des images sans langue)
            image_base_url: Prefixe des URLs d'images
            max_attempts: Budget de tentatives par requete
            max_wait: Delai maximum entre deux tentatives (secondes)
        """
        self._api_key = api_key
        self._language = language
        self._image_language = image_language
        self._image_base_url = image_base_url
        self._max_attempts = max_attempts
        self._max_wait = max_wait
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            api_key = self._api_key or ""
            is_v4_token = len(api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {api_key}"
            else:
                params["api_key"] = api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def _get(self, url: str, params: dict[str, Any]) -> httpx.Response:
        """
        GET avec retry, traduit l'epuisement du budget en RemoteUnavailableError.
        """
        try:
            return await request_with_retry(
                self._get_client(),
                "GET",
                url,
                max_attempts=self._max_attempts,
                max_wait=self._max_wait,
                params=params,
            )
        except (TransientAPIError, httpx.TransportError) as e:
            logger.error(f"TMDB indisponible apres {self._max_attempts} tentatives: {url}")
            raise RemoteUnavailableError(f"TMDB request failed: {url}: {e}") from e

    def image_url(self, file_path: str) -> str:
        """Construit l'URL absolue d'une image TMDB (taille originale)."""
        return f"{self._image_base_url}{file_path}"

    async def search_movies(self, text: str) -> list[dict[str, Any]]:
        """
        Recherche des films par texte.

        Args:
            text: Titre du film a rechercher

        Returns:
            Resultats bruts de /search/movie (liste vide si aucun)
        """
        try:
            response = await self._get(
                "/search/movie",
                {"query": text, "language": self._language, "include_adult": "false"},
            )
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailableError(f"TMDB search failed: {e}") from e
        return response.json().get("results", [])

    async def get_movie(self, tmdb_id: int) -> dict[str, Any]:
        """
        Recupere le film et ses sous-ressources en une seule requete.

        Sous-ressources: titres alternatifs, credits, images, mots-cles,
        sorties (releases et release_dates) et videos.

        Raises:
            MetadataNotFoundError: si TMDB repond 404
            RemoteUnavailableError: si le budget de tentatives est epuise
        """
        params = {
            "language": self._language,
            "append_to_response": ",".join(TMDB_MOVIE_APPENDS),
            "include_image_language": f"{self._image_language},null",
        }
        try:
            response = await self._get(f"/movie/{tmdb_id}", params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise MetadataNotFoundError(f"TMDB movie {tmdb_id} not found") from e
            raise RemoteUnavailableError(f"TMDB movie {tmdb_id} failed: {e}") from e
        return response.json()

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
