"""
Porte "single-flight" du client distant.

Un seul appel au fournisseur de metadonnees peut etre en cours dans tout
le processus, quel que soit l'identifiant demande. La porte est creee une
fois par le container DI et injectee la ou un appel distant est emis.
"""

import asyncio
from types import TracebackType
from typing import Optional, Type


class RemoteGate:
    """
    Exclusion mutuelle autour des appels au fournisseur distant.

    Usage:
        gate = RemoteGate()
        async with gate:
            data = await provider.get_movie(27205)
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """True si un appel distant est en cours."""
        return self._lock.locked()

    async def __aenter__(self) -> "RemoteGate":
        await self._lock.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._lock.release()
