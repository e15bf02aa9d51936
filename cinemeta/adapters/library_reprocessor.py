"""
Adaptateur du collaborateur de re-scan.

Le pipeline de scan de la bibliotheque vit hors de ce package : cet
adaptateur journalise les dossiers a retraiter pour qu'il les reprenne.
"""

from collections import deque
from pathlib import Path

from loguru import logger

from cinemeta.core.ports.repositories import ILibraryReprocessor

DEFAULT_HISTORY_SIZE = 100


class LoggingLibraryReprocessor(ILibraryReprocessor):
    """
    Implementation de ILibraryReprocessor qui journalise les demandes.

    Attributes:
        requested: Dernieres demandes de retraitement, de la plus ancienne a
            la plus recente (au plus ``history_size``)
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self.requested: deque[Path] = deque(maxlen=history_size)

    async def reprocess(self, folder_path: Path) -> None:
        """Journalise la demande de retraitement du dossier."""
        self.requested.append(folder_path)
        logger.info("Retraitement demande", folder=str(folder_path))
