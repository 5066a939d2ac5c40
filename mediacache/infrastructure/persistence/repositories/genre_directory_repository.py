"""
Implementation SQLModel du repository de l'annuaire des genres.

L'annuaire est un document unique (cle "genres") remplace en bloc.
"""

import json
from typing import Optional

from sqlmodel import Session

from mediacache.core.entities.media import GenreDirectory
from mediacache.core.freshness import as_utc
from mediacache.core.ports.repositories import IGenreDirectoryRepository
from mediacache.infrastructure.persistence.models import GenreDirectoryModel
from mediacache.infrastructure.persistence.repositories.base import AsyncSQLModelRepository

DIRECTORY_KEY = "genres"


class SQLModelGenreDirectoryRepository(AsyncSQLModelRepository, IGenreDirectoryRepository):
    """Repository SQLModel pour l'annuaire des genres."""

    async def load(self) -> Optional[GenreDirectory]:
        """Charge l'annuaire, les cles JSON etant reconverties en entiers."""

        def _load(session: Session) -> Optional[GenreDirectory]:
            model = session.get(GenreDirectoryModel, DIRECTORY_KEY)
            if model is None:
                return None
            data = json.loads(model.data_json or "{}")
            return GenreDirectory(
                genres={int(key): name for key, name in data.items()},
                refreshed_at=as_utc(model.refreshed_at),
            )

        return await self._run(_load)

    async def save(self, directory: GenreDirectory) -> None:
        """Remplace l'annuaire persiste."""

        def _save(session: Session, model: GenreDirectoryModel) -> None:
            session.merge(model)
            session.commit()

        model = GenreDirectoryModel(
            id=DIRECTORY_KEY,
            data_json=json.dumps({str(key): name for key, name in directory.genres.items()}),
            refreshed_at=directory.refreshed_at,
        )
        await self._run(_save, model)
