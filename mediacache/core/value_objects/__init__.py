"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaKind : Espace de noms d'un contenu (MOVIE, SERIES, UNKNOWN)
"""

from mediacache.core.value_objects.media_kind import MediaKind

__all__ = [
    "MediaKind",
]
