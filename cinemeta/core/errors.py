"""
Hierarchie d'exceptions du domaine.

Les adaptateurs traduisent les exceptions des bibliotheques (httpx, tenacity,
json, OSError) vers ces classes avec ``raise ... from e``.
"""


class CinemetaError(RuntimeError):
    """Base error type."""


class RemoteUnavailableError(CinemetaError):
    """Le fournisseur distant reste indisponible apres epuisement des tentatives."""


class MetadataNotFoundError(CinemetaError):
    """L'identifiant demande n'existe pas chez le fournisseur distant."""


class CacheCorruptError(CinemetaError):
    """Fichier de cache ou sidecar illisible (toujours recupere localement)."""


class UnknownSourceError(CinemetaError):
    """Aucune source configuree ne contient le chemin demande."""


class DownloadError(CinemetaError):
    """Le telechargement d'une illustration a echoue."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Unable to download {url}: {reason}")


class InvalidImageTypeError(CinemetaError, ValueError):
    """Type d'image inconnu (erreur de programmation)."""


class MovieNotFoundError(CinemetaError):
    """Le film n'existe pas dans le catalogue."""
