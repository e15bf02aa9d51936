"""
Clients API externes pour l'enrichissement des metadonnees.

Ce module fournit l'adaptateur TMDB et son infrastructure:
- TMDBClient: The Movie Database (recherche, films)
- APICache: Cache persistant des recherches (24h)
- RemoteGate: Porte single-flight des appels distants
- TransientAPIError / with_retry / request_with_retry: retry avec backoff
"""

from cinemeta.adapters.api.cache import APICache
from cinemeta.adapters.api.gate import RemoteGate
from cinemeta.adapters.api.retry import TransientAPIError, request_with_retry, with_retry
from cinemeta.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RemoteGate",
    "TMDBClient",
    "TransientAPIError",
    "request_with_retry",
    "with_retry",
]
