"""
Modeles SQLModel pour la base de donnees MediaCache.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- media_records: Fiches resolues, cle = identifiant de contenu
- genre_directory: Annuaire des genres (une seule ligne, cle "genres")

Les champs JSON (*_json) permettent de stocker des listes et mappings
de maniere serialisee.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from sqlmodel import Field, SQLModel


class MediaRecordModel(SQLModel, table=True):
    """
    Modele representant une fiche resolue.

    kind vaut "movie", "tv" ou "unknown" (cache negatif).
    """

    __tablename__ = "media_records"

    id: str = Field(primary_key=True)
    kind: str = Field(default="unknown", index=True)
    title: str | None = None
    search_title: str | None = Field(default=None, index=True)  # title.casefold()
    overview: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    rating: float | None = None
    release_date: str | None = None
    genres_json: str | None = None  # JSON: ["Action", "Drame"]
    raw_json: str | None = None  # JSON: reponse TMDB brute
    refreshed_at: datetime = Field(index=True)

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        if self.genres_json:
            return json.loads(self.genres_json)
        return []

    @genres.setter
    def genres(self, value: list[str]) -> None:
        """Serialise les genres en JSON."""
        self.genres_json = json.dumps(value)

    @property
    def raw(self) -> Optional[dict[str, Any]]:
        """Retourne la reponse brute deserialisee."""
        if self.raw_json:
            return json.loads(self.raw_json)
        return None


class GenreDirectoryModel(SQLModel, table=True):
    """
    Modele de l'annuaire des genres.

    data_json stocke le mapping id -> nom ; les cles JSON etant des chaines,
    la conversion en entiers est faite par le repository.
    """

    __tablename__ = "genre_directory"

    id: str = Field(default="genres", primary_key=True)
    data_json: str = "{}"
    refreshed_at: datetime
