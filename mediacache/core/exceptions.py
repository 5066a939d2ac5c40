"""
Exceptions du domaine MediaCache.

- UpstreamUnavailable : l'API amont n'a pas pu etre interrogee de maniere fiable
- StorageUnavailable : la persistance est inaccessible (toujours propagee)
- InvalidRequest : parametre obligatoire manquant ou invalide (couche web)

L'absence d'un identifiant dans les deux espaces de noms n'est PAS une
exception : c'est un resultat (NotFound) mis en cache negativement.
"""


class MediaCacheError(Exception):
    """Exception de base de l'application."""


class UpstreamUnavailable(MediaCacheError):
    """
    Erreur levee quand l'API amont est injoignable ou repond de facon inexploitable.

    Attributes:
        media_id: Identifiant concerne, si l'erreur porte sur une resolution
    """

    def __init__(self, message: str, media_id: str | None = None) -> None:
        self.media_id = media_id
        super().__init__(message)


class StorageUnavailable(MediaCacheError):
    """Erreur levee quand la base de donnees ne repond pas."""


class InvalidRequest(MediaCacheError):
    """Erreur levee pour une requete incomplete (ex: parametre id manquant)."""
