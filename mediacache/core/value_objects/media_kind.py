"""
Objet valeur pour le type de contenu resolu.

Les valeurs correspondent aux espaces de noms de l'API TMDB ("movie", "tv"),
ce qui permet de les reutiliser telles quelles dans les URLs et les reponses.
"""

from enum import Enum
from typing import Optional


class MediaKind(Enum):
    """Type de contenu determine lors de la resolution.

    Valeurs:
        MOVIE: Film (espace de noms /movie)
        SERIES: Serie TV (espace de noms /tv)
        UNKNOWN: Identifiant absent des deux espaces de noms
    """

    MOVIE = "movie"
    SERIES = "tv"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MediaKind"]:
        """Convertit une valeur libre ("movie", "tv", "series") en MediaKind."""
        if not value:
            return None
        normalized = str(value).strip().lower()
        if normalized == "series":
            return cls.SERIES
        for kind in cls:
            if kind.value == normalized:
                return kind
        return None
