"""
Utilitaires et constantes pour MediaCache.
"""

from mediacache.utils.constants import (
    BACKDROP_SIZE,
    POSTER_SIZE,
    TMDB_BASE_URL,
    TMDB_IMAGE_BASE_URL,
)

__all__ = [
    "TMDB_BASE_URL",
    "TMDB_IMAGE_BASE_URL",
    "POSTER_SIZE",
    "BACKDROP_SIZE",
]
