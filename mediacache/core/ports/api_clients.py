"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats pour le fournisseur de
métadonnées (TMDB) et pour le flux catalogue externe.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from mediacache.core.entities.media import CatalogEntry
from mediacache.core.value_objects import MediaKind


class ProbeStatus(Enum):
    """Issue d'une interrogation d'un espace de noms.

    Valeurs:
        FOUND: Réponse 2xx exploitable
        MISSING: Réponse 404, l'identifiant n'existe pas dans cet espace de noms
        UNAVAILABLE: Timeout, erreur réseau, ou tout autre statut non 2xx
    """

    FOUND = "found"
    MISSING = "missing"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ProbeResult:
    """
    Résultat d'une interrogation /movie/{id} ou /tv/{id}.

    Attributs :
        kind : Espace de noms interrogé
        status : Issue de l'interrogation
        payload : Corps JSON de la réponse (uniquement si FOUND)
        detail : Description de l'échec (statut HTTP, exception)
    """

    kind: MediaKind
    status: ProbeStatus
    payload: Optional[dict[str, Any]] = None
    detail: Optional[str] = None


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de métadonnées.

    Les méthodes de liste (genres, tendances, recherche) lèvent
    UpstreamUnavailable en cas d'échec ; probe() ne lève jamais et
    encode l'échec dans ProbeResult.
    """

    @abstractmethod
    async def probe(self, kind: MediaKind, media_id: str) -> ProbeResult:
        """Interroge un espace de noms pour un identifiant."""
        ...

    @abstractmethod
    async def get_genres(self, kind: MediaKind) -> dict[int, str]:
        """Récupère la liste des genres d'un espace de noms."""
        ...

    @abstractmethod
    async def get_trending(self, kind: MediaKind, page: int = 1) -> list[str]:
        """Récupère les identifiants en tendance de la semaine."""
        ...

    @abstractmethod
    async def search_multi(self, query: str) -> list[str]:
        """Recherche amont multi-espaces, retourne les identifiants trouvés."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...


class ICatalogSource(ABC):
    """Interface du flux catalogue listant les identifiants connus."""

    @abstractmethod
    async def fetch_entries(self) -> list[CatalogEntry]:
        """Récupère et normalise le flux catalogue."""
        ...
