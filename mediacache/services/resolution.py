"""
Coordinateur de resolution des fiches.

ResolutionCoordinator est le coeur du proxy : pour un identifiant, il decide
s'il faut servir la fiche stockee ou la reconstruire depuis l'API amont, et
garantit qu'au plus une resolution amont est en cours par identifiant.

Etats d'une resolution:
    CheckingCache -> HitFresh | MissOrStale
    MissOrStale -> ResolvingUpstream -> Resolved | Failed
    Resolved -> Cached (upsert puis retour de la fiche)
"""

import asyncio
import re
from datetime import datetime, timedelta
from typing import Callable, Iterable

from loguru import logger

from mediacache.adapters.api.payloads import (
    display_date,
    display_title,
    image_url,
    payload_genre_ids,
)
from mediacache.core.entities.media import MediaRecord
from mediacache.core.exceptions import InvalidRequest, UpstreamUnavailable
from mediacache.core.freshness import is_fresh, utc_now
from mediacache.core.ports.repositories import IMediaRecordRepository
from mediacache.services.genre_directory import GenreDirectoryService
from mediacache.services.upstream_resolver import Found, UpstreamResolver
from mediacache.utils.constants import BACKDROP_SIZE, POSTER_SIZE, TMDB_IMAGE_BASE_URL

# Identifiant TMDB: jeton simple, sans separateur de chemin ni de requete
MEDIA_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class ResolutionCoordinator:
    """
    Resolution d'identifiants avec cache, fraicheur et single-flight.

    - Fiche fraiche (y compris "unknown") : retournee telle quelle
    - Fiche absente ou perimee : resolution amont, puis upsert
    - API indisponible : fiche perimee retournee si elle existe, sinon erreur
    - Appels concurrents sur le meme identifiant : une seule tache partagee

    Example:
        coordinator = ResolutionCoordinator(repository, resolver, genre_directory)
        record = await coordinator.resolve_item("550")
        print(record.kind, record.title, record.genres)
    """

    def __init__(
        self,
        repository: IMediaRecordRepository,
        resolver: UpstreamResolver,
        genre_directory: GenreDirectoryService,
        record_ttl: timedelta = timedelta(hours=1),
        image_base_url: str = TMDB_IMAGE_BASE_URL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialise le coordinateur.

        Args:
            repository: Stockage des fiches
            resolver: Resolution amont film/serie
            genre_directory: Traduction des ids de genres
            record_ttl: Duree de validite d'une fiche (positive ou negative)
            image_base_url: Base des URLs d'images TMDB
            clock: Horloge (injectable pour les tests)
        """
        self._repository = repository
        self._resolver = resolver
        self._genre_directory = genre_directory
        self._record_ttl = record_ttl
        self._image_base_url = image_base_url
        self._clock = clock
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def in_flight_count(self) -> int:
        """Nombre de resolutions en cours."""
        return len(self._in_flight)

    async def resolve_item(self, media_id: str) -> MediaRecord:
        """
        Resout un identifiant en fiche.

        Les appelants concurrents pour un meme identifiant partagent la meme
        tache et observent la meme fiche (ou la meme exception). L'annulation
        d'un appelant n'annule pas la tache partagee.

        Raises:
            InvalidRequest: Identifiant vide ou mal forme
            UpstreamUnavailable: API indisponible et aucune fiche precedente
            StorageUnavailable: Base inaccessible
        """
        key = str(media_id).strip()
        if not key:
            raise InvalidRequest("Missing id")
        if not MEDIA_ID_PATTERN.fullmatch(key):
            raise InvalidRequest(f"Invalid id: {key!r}")

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve(key))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def resolve_many(self, media_ids: Iterable[str]) -> list[MediaRecord]:
        """
        Resout un lot d'identifiants en parallele, dans l'ordre d'entree.

        Les identifiants en echec UpstreamUnavailable sont ecartes ; les
        autres erreurs (stockage notamment) sont propagees.
        """
        ids = list(media_ids)
        results = await asyncio.gather(
            *(self.resolve_item(media_id) for media_id in ids),
            return_exceptions=True,
        )

        records = []
        for media_id, result in zip(ids, results):
            if isinstance(result, (UpstreamUnavailable, InvalidRequest)):
                logger.warning("Identifiant ignore", media_id=media_id, error=str(result))
                continue
            if isinstance(result, BaseException):
                raise result
            records.append(result)
        return records

    async def _resolve(self, key: str) -> MediaRecord:
        """Machine a etats d'une resolution (executee une fois par vol)."""
        cached = await self._repository.get(key)
        if cached is not None and is_fresh(cached.refreshed_at, self._record_ttl, self._clock()):
            logger.debug("Fiche fraiche servie depuis le cache", media_id=key, kind=cached.kind.value)
            return cached

        try:
            record = await self._build_record(key)
        except UpstreamUnavailable as e:
            if cached is not None:
                logger.warning("API indisponible, fiche perimee servie", media_id=key, error=str(e))
                return cached
            raise

        await self._repository.upsert(record)
        logger.debug("Fiche resolue", media_id=key, kind=record.kind.value)
        return record

    async def _build_record(self, key: str) -> MediaRecord:
        """Interroge l'amont et assemble une nouvelle fiche complete."""
        result = await self._resolver.resolve(key)
        if not isinstance(result, Found):
            return MediaRecord.unknown(key, self._clock())

        payload = result.payload
        genres = await self._genre_directory.genre_names(payload_genre_ids(payload))

        return MediaRecord(
            id=key,
            kind=result.kind,
            title=display_title(payload),
            overview=payload.overview,
            poster_url=image_url(self._image_base_url, POSTER_SIZE, payload.poster_path),
            backdrop_url=image_url(self._image_base_url, BACKDROP_SIZE, payload.backdrop_path),
            rating=payload.vote_average,
            release_date=display_date(payload),
            genres=tuple(genres),
            refreshed_at=self._clock(),
            raw=result.raw,
        )
