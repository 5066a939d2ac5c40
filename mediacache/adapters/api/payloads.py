"""
Modeles de validation des reponses amont.

Les reponses TMDB et le flux catalogue sont du JSON de forme libre : ils sont
valides une seule fois a l'entree via pydantic, puis les regles de
coalescence (titre film/serie, date de sortie/premiere diffusion,
genres/genre_ids) sont appliquees par des fonctions explicites.
"""

from typing import Any, Iterable, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mediacache.core.entities.media import CatalogEntry
from mediacache.core.value_objects import MediaKind


class TmdbGenre(BaseModel):
    """Genre tel que renvoye par /genre/*/list ou dans les details."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: Optional[str] = None


class TmdbGenreList(BaseModel):
    """Reponse de /genre/movie/list et /genre/tv/list."""

    model_config = ConfigDict(extra="ignore")

    genres: list[TmdbGenre] = Field(default_factory=list)


class MediaPayload(BaseModel):
    """
    Reponse de /movie/{id} ou /tv/{id}.

    Les films exposent title/release_date, les series name/first_air_date ;
    les details exposent genres[], les listes genre_ids[].
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    title: Optional[str] = None
    name: Optional[str] = None
    original_title: Optional[str] = None
    original_name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: Optional[float] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    genres: list[TmdbGenre] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)


class TmdbResultList(BaseModel):
    """Reponse paginee de /trending et /search/multi."""

    model_config = ConfigDict(extra="ignore")

    page: int = 1
    results: list[dict[str, Any]] = Field(default_factory=list)

    def ids(self, media_types: Optional[set[str]] = None) -> list[str]:
        """Identifiants des resultats, filtres sur media_type si demande."""
        ids = []
        for item in self.results:
            if media_types and item.get("media_type") not in media_types:
                continue
            if item.get("id") is not None:
                ids.append(str(item["id"]))
        return ids


class CatalogFeedItem(BaseModel):
    """Entree objet du flux catalogue: {"id": ..., "type": ...}."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    type: Optional[str] = None
    media_type: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Optional[str]:
        """Les identifiants numeriques sont ramenes a des chaines."""
        if v is None or isinstance(v, bool):
            return None
        return str(v).strip() or None


def display_title(payload: MediaPayload) -> Optional[str]:
    """Titre affiche: title (film) sinon name (serie)."""
    return payload.title or payload.name or None


def display_date(payload: MediaPayload) -> Optional[str]:
    """Date affichee: release_date (film) sinon first_air_date (serie)."""
    return payload.release_date or payload.first_air_date or None


def payload_genre_ids(payload: MediaPayload) -> list[int]:
    """Identifiants de genres: genres[].id (details) sinon genre_ids (listes)."""
    if payload.genres:
        return [genre.id for genre in payload.genres]
    return list(payload.genre_ids)


def image_url(base_url: str, size: str, path: Optional[str]) -> Optional[str]:
    """Construit l'URL complete d'une image TMDB, None sans chemin."""
    if not path:
        return None
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}/{size}{path}"


def parse_catalog(source: Any) -> list[CatalogEntry]:
    """
    Normalise le flux catalogue en liste de CatalogEntry.

    Le flux est soit un tableau, soit un objet dont les valeurs sont les
    entrees. Chaque entree est un identifiant brut ou un objet portant "id".
    Les entrees sans identifiant sont ignorees, l'ordre est conserve.
    """
    if isinstance(source, dict):
        items: Iterable[Any] = source.values()
    elif isinstance(source, list):
        items = source
    else:
        logger.warning("Flux catalogue inattendu", type=type(source).__name__)
        return []

    entries = []
    for item in items:
        if isinstance(item, dict):
            try:
                feed_item = CatalogFeedItem.model_validate(item)
            except ValidationError as e:
                logger.debug("Entree catalogue invalide ignoree", error=str(e))
                continue
            if feed_item.id:
                kind = MediaKind.parse(feed_item.media_type or feed_item.type)
                entries.append(CatalogEntry(id=feed_item.id, kind=kind))
        elif isinstance(item, (str, int)) and not isinstance(item, bool):
            media_id = str(item).strip()
            if media_id:
                entries.append(CatalogEntry(id=media_id))
    return entries
