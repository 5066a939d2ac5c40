"""
Annuaire des genres (id -> nom) partage par toutes les resolutions.

L'annuaire fusionne les listes de genres films et series (les films
l'emportent en cas de collision d'id), est persiste avec sa propre duree de
validite (24h par defaut) et garde une copie en memoire. Apres un
rafraichissement en echec, l'API n'est pas reinterrogee avant la fin d'un
delai de grace (60s par defaut).
"""

import asyncio
from datetime import datetime, timedelta
from typing import Callable, Optional

from loguru import logger

from mediacache.core.entities.media import GenreDirectory
from mediacache.core.exceptions import UpstreamUnavailable
from mediacache.core.freshness import is_fresh, utc_now
from mediacache.core.ports.api_clients import IMetadataProvider
from mediacache.core.ports.repositories import IGenreDirectoryRepository
from mediacache.core.value_objects import MediaKind


def merge_genres(movie_genres: dict[int, str], tv_genres: dict[int, str]) -> dict[int, str]:
    """Fusionne les deux listes: toutes les entrees films, puis les ids series absents."""
    merged = dict(movie_genres)
    for genre_id, name in tv_genres.items():
        merged.setdefault(genre_id, name)
    return merged


class GenreDirectoryService:
    """
    Service de traduction des ids de genres.

    Un seul rafraichissement a la fois : les appelants concurrents attendent
    le verrou puis reutilisent le resultat du rafraichissement qui les a
    precedes, succes comme echec. Un rafraichissement en echec conserve
    l'annuaire precedent s'il existe et ouvre un delai de grace pendant
    lequel aucun nouvel appel amont n'est tente.

    Example:
        directory = GenreDirectoryService(provider, repository, ttl=timedelta(days=1))
        names = await directory.genre_names([28, 12])
    """

    def __init__(
        self,
        provider: IMetadataProvider,
        repository: IGenreDirectoryRepository,
        ttl: timedelta = timedelta(days=1),
        clock: Callable[[], datetime] = utc_now,
        retry_backoff: timedelta = timedelta(seconds=60),
    ) -> None:
        self._provider = provider
        self._repository = repository
        self._ttl = ttl
        self._clock = clock
        self._retry_backoff = retry_backoff
        self._directory: Optional[GenreDirectory] = None
        self._failed_at: Optional[datetime] = None
        self._last_error: Optional[UpstreamUnavailable] = None
        self._lock = asyncio.Lock()

    def _is_fresh(self, directory: Optional[GenreDirectory]) -> bool:
        return directory is not None and is_fresh(directory.refreshed_at, self._ttl, self._clock())

    def _in_backoff(self) -> bool:
        return self._failed_at is not None and is_fresh(
            self._failed_at, self._retry_backoff, self._clock()
        )

    def _fallback(self) -> GenreDirectory:
        """Annuaire precedent, ou l'echec recent si aucun n'a jamais ete charge."""
        if self._directory is not None:
            return self._directory
        raise UpstreamUnavailable(f"Genre directory unavailable: {self._last_error}")

    async def genre_names(self, genre_ids: list[int]) -> list[str]:
        """
        Traduit des ids en noms, en ignorant les ids inconnus.

        Raises:
            UpstreamUnavailable: Si l'annuaire doit etre cree et que l'API echoue
            StorageUnavailable: Si la base est inaccessible
        """
        if not genre_ids:
            return []
        directory = await self.current()
        return list(directory.names(genre_ids))

    async def current(self) -> GenreDirectory:
        """Retourne un annuaire frais, en le rechargeant ou rafraichissant au besoin."""
        if self._is_fresh(self._directory):
            return self._directory

        async with self._lock:
            if self._is_fresh(self._directory):
                return self._directory

            stored = await self._repository.load()
            if stored is not None and (
                self._directory is None or stored.refreshed_at > self._directory.refreshed_at
            ):
                self._directory = stored
            if self._is_fresh(self._directory):
                return self._directory
            if self._in_backoff():
                return self._fallback()

            return await self._refresh_locked()

    async def refresh(self, force: bool = False) -> GenreDirectory:
        """Rafraichit l'annuaire (force=True ignore la fraicheur)."""
        async with self._lock:
            if not force and self._is_fresh(self._directory):
                return self._directory
            if self._directory is None:
                self._directory = await self._repository.load()
            return await self._refresh_locked()

    async def _refresh_locked(self) -> GenreDirectory:
        """Recupere les deux listes en parallele et remplace l'annuaire en bloc."""
        try:
            movie_genres, tv_genres = await asyncio.gather(
                self._provider.get_genres(MediaKind.MOVIE),
                self._provider.get_genres(MediaKind.SERIES),
            )
        except UpstreamUnavailable as e:
            self._failed_at = self._clock()
            self._last_error = e
            if self._directory is not None:
                logger.warning("Rafraichissement des genres en echec, annuaire precedent conserve", error=str(e))
                return self._directory
            raise

        directory = GenreDirectory(
            genres=merge_genres(movie_genres, tv_genres),
            refreshed_at=self._clock(),
        )
        await self._repository.save(directory)
        self._directory = directory
        self._failed_at = None
        self._last_error = None
        logger.info("Annuaire des genres rafraichi", count=len(directory.genres))
        return directory
