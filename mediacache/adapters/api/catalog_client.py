"""
Client du flux catalogue externe.

Le flux liste les identifiants proposes par le service (tableau ou objet
d'objets). Il n'est jamais persiste : chaque requete qui en a besoin le
recharge.
"""

from typing import Optional

import httpx
from loguru import logger

from mediacache.adapters.api.payloads import parse_catalog
from mediacache.adapters.api.retry import RateLimitError, request_with_retry
from mediacache.core.entities.media import CatalogEntry
from mediacache.core.exceptions import UpstreamUnavailable
from mediacache.core.ports.api_clients import ICatalogSource


class CatalogClient(ICatalogSource):
    """
    Source catalogue HTTP.

    Example:
        catalog = CatalogClient(url="https://example.org/list.json")
        entries = await catalog.fetch_entries()
        await catalog.close()
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def fetch_entries(self) -> list[CatalogEntry]:
        """
        Telecharge et normalise le flux.

        Raises:
            UpstreamUnavailable: Si le flux est injoignable ou n'est pas du JSON
        """
        try:
            response = await request_with_retry(self._get_client(), "GET", self._url)
            source = response.json()
        except (httpx.HTTPError, RateLimitError, ValueError) as e:
            logger.warning("Flux catalogue indisponible", url=self._url, error=str(e))
            raise UpstreamUnavailable(f"Catalog fetch failed: {e}") from e

        entries = parse_catalog(source)
        logger.debug("Flux catalogue charge", count=len(entries))
        return entries

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
