"""
Configuration de la base de donnees pour MediaCache.

Ce module fournit :
- Creation de l'engine (un seul par processus, injecte par le container)
- Fonction d'initialisation des tables

La base de donnees est configuree via MEDIACACHE_DATABASE_URL
(defaut: sqlite:///data/mediacache.db).
"""

from collections.abc import Iterator
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cree l'engine SQLAlchemy.

    Pour SQLite fichier, le repertoire parent est cree si necessaire et
    l'engine autorise l'usage multi-thread (les repositories travaillent
    dans l'executor par defaut de la boucle asyncio).

    Args:
        database_url: URL SQLAlchemy
        echo: Log SQL (debug)
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
            db_path = Path(database_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(database_url, echo=echo, connect_args=connect_args)


def init_db(engine: Engine) -> Iterator[Engine]:
    """
    Initialise la base de donnees en creant toutes les tables.

    Utilisable comme Resource dependency-injector : l'engine est libere
    a l'arret du container.

    Yields:
        L'engine initialise
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from mediacache.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Tables initialisees", url=str(engine.url))
    try:
        yield engine
    finally:
        engine.dispose()
