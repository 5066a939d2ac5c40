"""
Module de persistance pour MediaCache.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine, initialisation des tables
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations asynchrones des ports de stockage

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from mediacache.infrastructure.persistence import create_db_engine, init_db

    engine = create_db_engine("sqlite:///data/mediacache.db")
    init_db(engine)
"""

from mediacache.infrastructure.persistence.database import (
    create_db_engine,
    init_db,
)
from mediacache.infrastructure.persistence.models import (
    GenreDirectoryModel,
    MediaRecordModel,
)

__all__ = [
    "create_db_engine",
    "init_db",
    "MediaRecordModel",
    "GenreDirectoryModel",
]
