"""
Construction des URLs du lecteur integre.

Formatage pur, sans etat : un identifiant seul designe un film, un couple
saison/episode designe un episode de serie.
"""

from typing import Any, Optional

from mediacache.core.exceptions import InvalidRequest
from mediacache.core.value_objects import MediaKind


def _as_number(value: Optional[str]) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidRequest(f"Invalid number: {value}") from e


def build_embed(
    base_url: str,
    media_id: Optional[str],
    season: Optional[str] = None,
    episode: Optional[str] = None,
) -> dict[str, Any]:
    """
    Construit la reponse du endpoint embed.

    Args:
        base_url: Base du lecteur (ex: "https://player.example/embed/")
        media_id: Identifiant du contenu (obligatoire)
        season: Numero de saison (avec episode, selectionne la forme serie)
        episode: Numero d'episode

    Raises:
        InvalidRequest: Identifiant manquant ou numero non entier
    """
    media_id = (media_id or "").strip()
    if not media_id:
        raise InvalidRequest("Missing id")

    season_number = _as_number(season)
    episode_number = _as_number(episode)
    is_episode = season_number is not None and episode_number is not None

    path = f"{media_id}/{season_number}/{episode_number}" if is_episode else media_id
    kind = MediaKind.SERIES if is_episode else MediaKind.MOVIE

    return {
        "success": True,
        "type": kind.value,
        "tmdb_id": media_id,
        "season": season_number,
        "episode": episode_number,
        "embed_url": f"{base_url}?id={path}",
    }
