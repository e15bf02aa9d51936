"""
Mecanisme de retry avec backoff exponentiel pour l'API distante.

Les echecs transitoires (429 rate limiting, erreurs 5xx, erreurs de
transport httpx) sont relances avec un delai croissant et du jitter
aleatoire. Les autres erreurs HTTP remontent immediatement.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=10, max_wait=60)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from cinemeta.utils.constants import REMOTE_MAX_ATTEMPTS


class TransientAPIError(Exception):
    """
    Exception levee pour une reponse HTTP qui merite une nouvelle tentative.

    Attributes:
        status_code: Code HTTP recu (429 ou 5xx)
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"Transient HTTP {status_code}. Retry after: {retry_after}s")


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        "Nouvelle tentative API",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


def with_retry(max_attempts: int = REMOTE_MAX_ATTEMPTS, max_wait: float = 60):
    """
    Decorateur pour relancer sur echec transitoire avec backoff exponentiel.

    Utilise wait_random_exponential pour ajouter du jitter. Apres
    ``max_attempts`` tentatives, la derniere exception est relevee telle quelle.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 10)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)
    """
    return retry(
        retry=retry_if_exception_type((TransientAPIError, httpx.TransportError)),
        wait=wait_random_exponential(multiplier=0.5, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


def _is_transient(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = REMOTE_MAX_ATTEMPTS,
    max_wait: float = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur echec transitoire.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        TransientAPIError: Si 429/5xx apres epuisement des tentatives
        httpx.TransportError: Si le reseau reste en echec
        httpx.HTTPStatusError: Pour les autres erreurs HTTP (4xx)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if _is_transient(response.status_code):
            retry_after_header = response.headers.get("Retry-After")
            retry_after = (
                int(retry_after_header)
                if retry_after_header and retry_after_header.isdigit()
                else None
            )
            raise TransientAPIError(response.status_code, retry_after)
        response.raise_for_status()
        return response

    return await _do_request()
