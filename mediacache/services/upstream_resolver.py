"""
Resolution amont d'un identifiant.

Les espaces de noms films et series partagent le meme espace d'identifiants :
l'identifiant est d'abord cherche comme film, puis comme serie. L'ordre est
une regle de desambiguisation, pas une heuristique.
"""

from dataclasses import dataclass
from typing import Any, Union

from loguru import logger
from pydantic import ValidationError

from mediacache.adapters.api.payloads import MediaPayload
from mediacache.core.exceptions import UpstreamUnavailable
from mediacache.core.ports.api_clients import IMetadataProvider, ProbeStatus
from mediacache.core.value_objects import MediaKind


@dataclass(frozen=True)
class Found:
    """Identifiant trouve dans un espace de noms.

    Attributes:
        kind: Espace de noms ayant repondu
        payload: Reponse validee
        raw: Reponse JSON brute
    """

    kind: MediaKind
    payload: MediaPayload
    raw: dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    """Identifiant absent des deux espaces de noms (404 des deux cotes)."""

    media_id: str


ResolutionResult = Union[Found, NotFound]


class UpstreamResolver:
    """
    Desambiguise un identifiant en interrogeant les espaces de noms dans l'ordre.

    Regles:
    - Le premier espace qui repond FOUND gagne (films avant series)
    - NotFound uniquement si tous les espaces repondent MISSING (404)
    - Sinon, si au moins un espace est UNAVAILABLE, leve UpstreamUnavailable
      pour ne jamais mettre en cache negatif une panne passagere

    Example:
        resolver = UpstreamResolver(provider=tmdb_client)
        result = await resolver.resolve("550")
        if isinstance(result, Found):
            print(result.kind, result.payload.title)
    """

    PROBE_ORDER: tuple[MediaKind, ...] = (MediaKind.MOVIE, MediaKind.SERIES)

    def __init__(self, provider: IMetadataProvider) -> None:
        self._provider = provider

    async def resolve(self, media_id: str) -> ResolutionResult:
        """
        Resout un identifiant.

        Returns:
            Found(kind, payload) ou NotFound

        Raises:
            UpstreamUnavailable: Si aucun espace n'a repondu FOUND et qu'au
                moins un n'a pas pu etre interroge de maniere fiable
        """
        failures: list[str] = []

        for kind in self.PROBE_ORDER:
            probe = await self._provider.probe(kind, media_id)

            if probe.status is ProbeStatus.FOUND:
                try:
                    payload = MediaPayload.model_validate(probe.payload)
                except ValidationError as e:
                    logger.warning(
                        "Reponse amont invalide", media_id=media_id, kind=kind.value, error=str(e)
                    )
                    failures.append(f"{kind.value}: invalid payload")
                    continue
                return Found(kind=kind, payload=payload, raw=probe.payload or {})

            if probe.status is ProbeStatus.UNAVAILABLE:
                failures.append(f"{kind.value}: {probe.detail}")

        if failures:
            raise UpstreamUnavailable(
                f"Upstream unavailable for {media_id} ({'; '.join(failures)})",
                media_id=media_id,
            )
        return NotFound(media_id=media_id)
