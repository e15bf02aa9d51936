"""
Cache persistant pour les recherches TMDB.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les resultats de recherche entre les redemarrages.

Les enregistrements detailles des films ne passent pas par ce cache : ils
sont stockes en JSON brut, un fichier par identifiant (voir
services/metadata_cache.py).
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Attributes:
        SEARCH_TTL: Duree de vie des resultats de recherche (24h)

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("tmdb:search:inception", results)
        data = await cache.get("tmdb:search:inception")
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures en secondes (86400)

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur du cache (None si absente ou expiree)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur dans le cache avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
