"""
Vues en lecture du proxy.

MediaViewService compose le coordinateur de resolution, le flux catalogue,
le stockage et l'API amont pour produire les reponses des endpoints
(accueil, tendances, recherche, details, tirage aleatoire, liste paginee).

Le hasard (tirage des sections d'accueil et du contenu aleatoire) est
injecte pour que les tests puissent fournir des sequences deterministes.
"""

import random
from typing import Any, Callable, Optional, Sequence

from loguru import logger

from mediacache.core.exceptions import InvalidRequest, UpstreamUnavailable
from mediacache.core.ports.api_clients import ICatalogSource, IMetadataProvider
from mediacache.core.ports.repositories import IMediaRecordRepository
from mediacache.core.value_objects import MediaKind
from mediacache.services.resolution import ResolutionCoordinator
from mediacache.utils.constants import (
    HOME_SECTION_SIZE,
    HOME_SECTIONS,
    LIST_DEFAULT_LIMIT,
    LIST_MAX_LIMIT,
    SEARCH_FALLBACK_THRESHOLD,
    SEARCH_LIMIT,
)

Sampler = Callable[[Sequence[str], int], list[str]]
Chooser = Callable[[Sequence[str]], str]


def _unique(ids: Sequence[str]) -> list[str]:
    """Dedoublonne en conservant l'ordre."""
    return list(dict.fromkeys(ids))


class MediaViewService:
    """
    Service des vues JSON.

    Example:
        views = MediaViewService(coordinator, catalog, provider, repository)
        page = await views.list_page(page=2, limit=20)
    """

    def __init__(
        self,
        coordinator: ResolutionCoordinator,
        catalog: ICatalogSource,
        provider: IMetadataProvider,
        repository: IMediaRecordRepository,
        sampler: Sampler = random.sample,
        chooser: Chooser = random.choice,
    ) -> None:
        """
        Args:
            coordinator: Resolution des identifiants
            catalog: Flux des identifiants connus
            provider: API amont (tendances, recherche)
            repository: Stockage des fiches (recherche par titre)
            sampler: Tirage de k identifiants distincts (defaut: random.sample)
            chooser: Tirage d'un identifiant (defaut: random.choice)
        """
        self._coordinator = coordinator
        self._catalog = catalog
        self._provider = provider
        self._repository = repository
        self._sampler = sampler
        self._chooser = chooser

    async def _catalog_ids(self) -> list[str]:
        entries = await self._catalog.fetch_entries()
        return _unique([entry.id for entry in entries])

    async def home(self, page: int = 1) -> dict[str, Any]:
        """Sections d'accueil: tirages de 10 identifiants du catalogue, resolus."""
        ids = await self._catalog_ids()
        sections: dict[str, Any] = {"page": max(1, page)}
        for name in HOME_SECTIONS:
            picked = self._sampler(ids, min(HOME_SECTION_SIZE, len(ids))) if ids else []
            records = await self._coordinator.resolve_many(picked)
            sections[name] = [record.to_dict() for record in records]
        return sections

    async def trending(self, media_type: Optional[str] = None, page: int = 1) -> dict[str, Any]:
        """Tendances hebdomadaires amont ("tv" ou, par defaut, "movie"), resolues."""
        kind = MediaKind.SERIES if media_type == MediaKind.SERIES.value else MediaKind.MOVIE
        page = max(1, page)
        ids = await self._provider.get_trending(kind, page)
        records = await self._coordinator.resolve_many(_unique(ids))
        return {"page": page, "results": [record.to_dict() for record in records]}

    async def search(self, query: Optional[str]) -> dict[str, Any]:
        """
        Recherche par titre dans le cache, complete par l'amont si peu de resultats.

        L'echec de la recherche amont n'empeche pas de servir les resultats
        locaux.
        """
        query = (query or "").strip()
        if not query:
            return {"query": "", "results": []}

        records = await self._repository.search_by_title(query, SEARCH_LIMIT)

        if len(records) < SEARCH_FALLBACK_THRESHOLD:
            try:
                upstream_ids = await self._provider.search_multi(query)
            except UpstreamUnavailable as e:
                logger.warning("Recherche amont indisponible", query=query, error=str(e))
                upstream_ids = []
            known = {record.id for record in records}
            extra_ids = [media_id for media_id in _unique(upstream_ids) if media_id not in known]
            records.extend(await self._coordinator.resolve_many(extra_ids))

        return {"query": query, "results": [record.to_dict() for record in records]}

    async def details(self, media_id: Optional[str]) -> dict[str, Any]:
        """Fiche complete d'un identifiant, reponse amont brute incluse."""
        if not media_id or not media_id.strip():
            raise InvalidRequest("Missing id")
        record = await self._coordinator.resolve_item(media_id)
        return record.to_dict(include_raw=True)

    async def random_item(self) -> dict[str, Any]:
        """Un identifiant du catalogue tire au hasard, resolu."""
        ids = await self._catalog_ids()
        if not ids:
            raise UpstreamUnavailable("Catalog is empty")
        record = await self._coordinator.resolve_item(self._chooser(ids))
        return record.to_dict()

    async def list_page(self, page: int = 1, limit: Optional[int] = None) -> dict[str, Any]:
        """Tranche paginee du catalogue complet, resolue, avec le total."""
        page = max(1, page)
        if not limit or limit < 1:
            limit = LIST_DEFAULT_LIMIT
        limit = min(LIST_MAX_LIMIT, limit)

        ids = await self._catalog_ids()
        start = (page - 1) * limit
        records = await self._coordinator.resolve_many(ids[start:start + limit])

        return {
            "page": page,
            "per_page": limit,
            "total": len(ids),
            "results": [record.to_dict() for record in records],
        }
