"""
Implementation SQLModel du repository MediaRecord.

Implemente l'interface IMediaRecordRepository pour la persistance des fiches
resolues.
"""

import json
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from mediacache.core.entities.media import MediaRecord
from mediacache.core.freshness import as_utc
from mediacache.core.ports.repositories import IMediaRecordRepository
from mediacache.core.value_objects import MediaKind
from mediacache.infrastructure.persistence.models import MediaRecordModel
from mediacache.infrastructure.persistence.repositories.base import AsyncSQLModelRepository


class SQLModelMediaRecordRepository(AsyncSQLModelRepository, IMediaRecordRepository):
    """
    Repository SQLModel pour les fiches.

    Implemente IMediaRecordRepository avec conversion bidirectionnelle
    entre l'entite MediaRecord (domaine) et MediaRecordModel (persistance).
    """

    def _to_entity(self, model: MediaRecordModel) -> MediaRecord:
        """
        Convertit un modele DB en entite domaine.

        Les horodatages relus depuis SQLite sont naifs : ils sont remis en UTC.
        """
        return MediaRecord(
            id=model.id,
            kind=MediaKind.parse(model.kind) or MediaKind.UNKNOWN,
            title=model.title,
            overview=model.overview,
            poster_url=model.poster_url,
            backdrop_url=model.backdrop_url,
            rating=model.rating,
            release_date=model.release_date,
            genres=tuple(model.genres),
            refreshed_at=as_utc(model.refreshed_at),
            raw=model.raw,
        )

    def _to_model(self, entity: MediaRecord) -> MediaRecordModel:
        """Convertit une entite domaine en modele DB."""
        return MediaRecordModel(
            id=entity.id,
            kind=entity.kind.value,
            title=entity.title,
            search_title=entity.title.casefold() if entity.title else None,
            overview=entity.overview,
            poster_url=entity.poster_url,
            backdrop_url=entity.backdrop_url,
            rating=entity.rating,
            release_date=entity.release_date,
            genres_json=json.dumps(list(entity.genres)) if entity.genres else None,
            raw_json=json.dumps(entity.raw) if entity.raw is not None else None,
            refreshed_at=entity.refreshed_at,
        )

    async def get(self, media_id: str) -> Optional[MediaRecord]:
        """Recupere une fiche par son identifiant."""

        def _get(session: Session, key: str) -> Optional[MediaRecord]:
            model = session.get(MediaRecordModel, key)
            return self._to_entity(model) if model else None

        return await self._run(_get, media_id)

    async def upsert(self, record: MediaRecord) -> None:
        """Remplace la fiche complete (pas de mise a jour partielle)."""

        def _upsert(session: Session, model: MediaRecordModel) -> None:
            session.merge(model)
            session.commit()

        await self._run(_upsert, self._to_model(record))

    async def search_by_title(self, text: str, limit: int = 20) -> list[MediaRecord]:
        """
        Recherche approximative: sous-chaine insensible a la casse (Unicode).

        La comparaison porte sur search_title, le titre deja passe par
        str.casefold a l'ecriture: SQLite ne sait baisser la casse que
        des caracteres ASCII.

        Les caracteres % et _ sont echappes ; pas de tri, l'ordre est celui
        du stockage.
        """

        def _search(session: Session, needle: str, max_results: int) -> list[MediaRecord]:
            statement = (
                select(MediaRecordModel)
                .where(MediaRecordModel.search_title.is_not(None))
                .where(MediaRecordModel.search_title.contains(needle, autoescape=True))
                .limit(max_results)
            )
            return [self._to_entity(model) for model in session.exec(statement).all()]

        needle = text.strip().casefold()
        if not needle or limit <= 0:
            return []
        return await self._run(_search, needle, limit)

    async def count(self) -> int:
        """Nombre de fiches stockees."""

        def _count(session: Session) -> int:
            return session.exec(select(func.count()).select_from(MediaRecordModel)).one()

        return await self._run(_count)
