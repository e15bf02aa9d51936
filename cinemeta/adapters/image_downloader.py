"""
Adaptateur de telechargement des illustrations via httpx.

Le contenu est ecrit par morceaux dans le fichier de destination : une
image n'est jamais chargee entierement en memoire.
"""

from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from cinemeta.core.errors import DownloadError
from cinemeta.core.ports.api_clients import IImageDownloader

# Taille des morceaux ecrits sur disque (64 KB)
CHUNK_SIZE: int = 64 * 1024


class HttpImageDownloader(IImageDownloader):
    """
    Implementation de IImageDownloader avec un httpx.AsyncClient partage.

    Suit les redirections (les CDN d'images en utilisent) et traduit toute
    erreur httpx ou disque en DownloadError.
    """

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def download(self, url: str, destination: Path) -> None:
        """Telecharge ``url`` dans ``destination``."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Telechargement de {url}")
        try:
            async with self._get_client().stream("GET", url) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    async for chunk in response.aiter_bytes(CHUNK_SIZE):
                        f.write(chunk)
        except httpx.HTTPStatusError as e:
            raise DownloadError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DownloadError(url, str(e) or type(e).__name__) from e
        except OSError as e:
            raise DownloadError(url, str(e)) from e

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
