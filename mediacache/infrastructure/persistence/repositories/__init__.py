"""
Implementations SQLModel des repositories.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit l'engine via injection de dependances
- Execute le travail bloquant dans l'executor de la boucle asyncio
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from mediacache.infrastructure.persistence.repositories.genre_directory_repository import (
    SQLModelGenreDirectoryRepository,
)
from mediacache.infrastructure.persistence.repositories.media_record_repository import (
    SQLModelMediaRecordRepository,
)

__all__ = [
    "SQLModelMediaRecordRepository",
    "SQLModelGenreDirectoryRepository",
]
