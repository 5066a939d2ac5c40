"""
Media metadata entities.

Entities representing resolved content records and the genre directory,
as cached from the TMDB API.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from mediacache.core.value_objects import MediaKind


@dataclass
class MediaRecord:
    """
    Resolved metadata for one content identifier.

    A record is fully overwritten on every refresh and never deleted.
    Records of kind UNKNOWN are negative cache entries: they carry no
    genres, no artwork and no raw payload.

    Attributes:
        id: Opaque identifier shared by the movie and tv namespaces
        kind: Namespace the identifier was resolved in
        title: Movie title or series name
        overview: Plot summary
        poster_url: Full poster URL (w500)
        backdrop_url: Full backdrop URL (w780)
        rating: TMDB vote average
        release_date: Release date (movies) or first air date (series)
        genres: Genre names, without duplicates
        refreshed_at: Timestamp of the last resolution (UTC)
        raw: Upstream payload the record was built from
    """

    id: str
    kind: MediaKind = MediaKind.UNKNOWN
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    rating: Optional[float] = None
    release_date: Optional[str] = None
    genres: tuple[str, ...] = ()
    refreshed_at: Optional[datetime] = None
    raw: Optional[dict[str, Any]] = None

    @classmethod
    def unknown(cls, media_id: str, refreshed_at: datetime) -> "MediaRecord":
        """Build the negative cache entry for an identifier found nowhere."""
        return cls(id=media_id, kind=MediaKind.UNKNOWN, refreshed_at=refreshed_at)

    @property
    def is_unknown(self) -> bool:
        """True for negative cache entries."""
        return self.kind is MediaKind.UNKNOWN

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        """Serialize the record for the JSON API."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "title": self.title,
            "overview": self.overview,
            "poster": self.poster_url,
            "backdrop": self.backdrop_url,
            "rating": self.rating,
            "release_date": self.release_date,
            "genres": list(self.genres),
            "updated_at": self.refreshed_at.isoformat() if self.refreshed_at else None,
        }
        if self.is_unknown:
            data["error"] = "Not found"
        if include_raw:
            data["raw_tmdb"] = self.raw
        return data


@dataclass
class GenreDirectory:
    """
    Genre-id to genre-name mapping shared by every resolution.

    Replaced wholesale on each refresh, never patched.

    Attributes:
        genres: Mapping from TMDB genre id to display name
        refreshed_at: Timestamp of the last refresh (UTC)
    """

    genres: dict[int, str] = field(default_factory=dict)
    refreshed_at: Optional[datetime] = None

    def names(self, genre_ids: list[int]) -> tuple[str, ...]:
        """
        Translate genre ids to names.

        Unknown ids are dropped silently; duplicate names are suppressed
        while keeping the first occurrence order.
        """
        names: list[str] = []
        for genre_id in genre_ids:
            name = self.genres.get(genre_id)
            if name and name not in names:
                names.append(name)
        return tuple(names)


@dataclass(frozen=True)
class CatalogEntry:
    """
    Identifier read from the external catalog feed.

    Ephemeral: re-fetched for each request that needs it, never persisted.

    Attributes:
        id: Content identifier (as a string)
        kind: Kind announced by the feed, if any
    """

    id: str
    kind: Optional[MediaKind] = None
