"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance
des fiches résolues et de l'annuaire des genres. Toutes les opérations sont
asynchrones ; une panne de stockage lève StorageUnavailable.
"""

from abc import ABC, abstractmethod
from typing import Optional

from mediacache.core.entities.media import GenreDirectory, MediaRecord


class IMediaRecordRepository(ABC):
    """
    Interface de stockage des fiches MediaRecord.

    Définit les opérations de lecture ponctuelle, d'upsert et de recherche
    approximative par titre.
    """

    @abstractmethod
    async def get(self, media_id: str) -> Optional[MediaRecord]:
        """Récupère une fiche par son identifiant."""
        ...

    @abstractmethod
    async def upsert(self, record: MediaRecord) -> None:
        """Remplace ou insère la fiche complète (clé : id)."""
        ...

    @abstractmethod
    async def search_by_title(self, text: str, limit: int = 20) -> list[MediaRecord]:
        """Recherche insensible à la casse d'une sous-chaîne dans le titre."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Nombre de fiches stockées."""
        ...


class IGenreDirectoryRepository(ABC):
    """Interface de stockage de l'annuaire des genres (document unique)."""

    @abstractmethod
    async def load(self) -> Optional[GenreDirectory]:
        """Charge l'annuaire persisté, ou None s'il n'existe pas encore."""
        ...

    @abstractmethod
    async def save(self, directory: GenreDirectory) -> None:
        """Remplace l'annuaire persisté."""
        ...
