"""
Business entities representing core domain concepts.

Exports:
- MediaRecord: Resolved and cached metadata for one identifier
- GenreDirectory: Shared genre-id to genre-name mapping
- CatalogEntry: Identifier read from the external catalog feed
"""

from mediacache.core.entities.media import CatalogEntry, GenreDirectory, MediaRecord

__all__ = [
    "MediaRecord",
    "GenreDirectory",
    "CatalogEntry",
]
