"""
Socle commun des repositories asynchrones.

Les sessions SQLModel sont synchrones : chaque operation ouvre sa propre
session dans un thread de l'executor, de sorte qu'aucune requete ne bloque
la boucle d'evenements. Toute erreur SQLAlchemy est convertie en
StorageUnavailable.
"""

import asyncio
from functools import partial
from typing import Any, Callable, TypeVar

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from mediacache.core.exceptions import StorageUnavailable

T = TypeVar("T")


class AsyncSQLModelRepository:
    """Execute des unites de travail SQLModel hors de la boucle asyncio."""

    def __init__(self, engine: Engine) -> None:
        """
        Args :
            engine : Engine partage, cree une fois au demarrage
        """
        self._engine = engine

    def _in_session(self, work: Callable[..., T], *args: Any) -> T:
        with Session(self._engine) as session:
            return work(session, *args)

    async def _run(self, work: Callable[..., T], *args: Any) -> T:
        """
        Execute work(session, *args) dans l'executor.

        Raises:
            StorageUnavailable: Si la base est inaccessible ou la requete echoue
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(self._in_session, work, *args))
        except SQLAlchemyError as e:
            logger.error("Erreur de stockage", operation=work.__name__, error=str(e))
            raise StorageUnavailable(f"Storage error during {work.__name__}: {e}") from e
