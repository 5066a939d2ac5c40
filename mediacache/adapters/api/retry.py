"""
Mecanisme de retry avec backoff exponentiel pour les API externes.

Gere les erreurs 429 (rate limiting) en relancant les requetes. Le delai
respecte le header Retry-After quand l'API le fournit, sinon il suit un
backoff exponentiel avec jitter.

Usage:
    response = await request_with_retry(client, "GET", "/movie/550")
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


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit le header Retry-After (secondes). Les formats date sont ignores."""
    if not value:
        return None
    try:
        return max(0, int(value))
    except ValueError:
        return None


class _WaitRetryAfter:
    """Strategie d'attente tenacity: Retry-After si connu, backoff sinon."""

    def __init__(self, max_wait: int) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self._max_wait))
        return self._fallback(retry_state)


def with_retry(max_attempts: int = 3, max_wait: int = 10):
    """
    Decorateur pour relancer sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 3)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 10)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=_WaitRetryAfter(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    max_wait: int = 10,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Les autres erreurs HTTP (4xx, 5xx) sont propagees immediatement sous
    forme de httpx.HTTPStatusError ; les erreurs reseau et timeouts sous
    forme de httpx.TransportError.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL (relative a base_url du client, ou absolue)
        max_attempts: Nombre maximum de tentatives (defaut: 3)
        max_wait: Attente maximum entre deux tentatives (secondes)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            logger.debug("Rate limit atteint", url=url, retry_after=retry_after)
            raise RateLimitError(retry_after)
        response.raise_for_status()
        return response

    return await _do_request()
