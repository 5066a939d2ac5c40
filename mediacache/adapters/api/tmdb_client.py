"""
Client TMDB pour la resolution de metadonnees films et series.

Implemente l'interface IMetadataProvider pour TMDB (The Movie Database).
Utilise le mecanisme de retry pour gerer le rate limiting et le cache
disque pour les listes (tendances, recherche multi).

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    probe = await client.probe(MediaKind.MOVIE, "550")
    genres = await client.get_genres(MediaKind.SERIES)
    await client.close()
"""

from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import ValidationError

from mediacache.adapters.api.cache import APICache
from mediacache.adapters.api.payloads import TmdbGenreList, TmdbResultList
from mediacache.adapters.api.retry import RateLimitError, request_with_retry
from mediacache.core.exceptions import UpstreamUnavailable
from mediacache.core.ports.api_clients import IMetadataProvider, ProbeResult, ProbeStatus
from mediacache.core.value_objects import MediaKind
from mediacache.utils.constants import TMDB_BASE_URL


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB.

    Implemente IMetadataProvider avec:
    - Interrogation d'un espace de noms (/movie/{id}, /tv/{id}) sans lever
    - Listes de genres, tendances hebdomadaires et recherche multi
    - Retry automatique sur rate limiting (429)
    - Timeout borne par requete

    Example:
        client = TMDBClient(api_key="xxx", cache=APICache(), timeout=5.0)
        result = await client.probe(MediaKind.MOVIE, "550")
        if result.status is ProbeStatus.FOUND:
            print(result.payload["title"])
        await client.close()
    """

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB v3 ou Read Access Token v4 (None = desactive)
            cache: Instance APICache pour les listes amont
            base_url: URL de base de l'API v3
            timeout: Duree maximum d'une requete en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._base_url = base_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Raises:
            UpstreamUnavailable: Si aucune cle n'est configuree
        """
        if not self._api_key:
            raise UpstreamUnavailable("TMDB API key not configured")

        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def probe(self, kind: MediaKind, media_id: str) -> ProbeResult:
        """
        Interroge /{kind}/{id}.

        Ne leve jamais: toute erreur est encodee dans le ProbeResult.
        Seul un 404 est un echec definitif (MISSING) ; timeout, erreur
        reseau, 429 persistant ou autre statut donnent UNAVAILABLE.

        Args:
            kind: Espace de noms (MOVIE ou SERIES)
            media_id: Identifiant a interroger

        Returns:
            ProbeResult avec le payload JSON si FOUND
        """
        endpoint = f"/{kind.value}/{quote(media_id, safe='')}"
        try:
            client = self._get_client()
            response = await request_with_retry(client, "GET", endpoint)
            payload = response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                logger.debug("Absent de l'espace de noms", endpoint=endpoint)
                return ProbeResult(kind=kind, status=ProbeStatus.MISSING, detail="404")
            logger.warning(
                "Reponse inattendue", source=self.source, endpoint=endpoint, status=status_code
            )
            return ProbeResult(
                kind=kind, status=ProbeStatus.UNAVAILABLE, detail=f"HTTP {status_code}"
            )
        except (
            httpx.TransportError, httpx.InvalidURL, RateLimitError, UpstreamUnavailable, ValueError
        ) as e:
            logger.warning(
                "Interrogation en echec", source=self.source, endpoint=endpoint, error=str(e)
            )
            return ProbeResult(kind=kind, status=ProbeStatus.UNAVAILABLE, detail=str(e))

        if not isinstance(payload, dict):
            return ProbeResult(
                kind=kind, status=ProbeStatus.UNAVAILABLE, detail="unexpected body"
            )
        logger.debug("Trouve dans l'espace de noms", endpoint=endpoint)
        return ProbeResult(kind=kind, status=ProbeStatus.FOUND, payload=payload)

    async def _get_json(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """
        GET generique pour les listes.

        Raises:
            UpstreamUnavailable: Pour toute erreur HTTP, reseau ou de decodage
        """
        client = self._get_client()
        try:
            response = await request_with_retry(client, "GET", endpoint, params=params)
            data = response.json()
        except (httpx.HTTPError, RateLimitError, ValueError) as e:
            logger.warning("Appel en echec", source=self.source, endpoint=endpoint, error=str(e))
            raise UpstreamUnavailable(f"TMDB request failed for {endpoint}: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Unexpected TMDB response for {endpoint}")
        return data

    async def get_genres(self, kind: MediaKind) -> dict[int, str]:
        """
        Recupere la liste des genres d'un espace de noms.

        Returns:
            Mapping id -> nom (les genres sans nom sont ignores)
        """
        data = await self._get_json(f"/genre/{kind.value}/list")
        try:
            genre_list = TmdbGenreList.model_validate(data)
        except ValidationError as e:
            raise UpstreamUnavailable(f"Invalid genre list for {kind.value}") from e
        return {genre.id: genre.name for genre in genre_list.genres if genre.name}

    async def get_trending(self, kind: MediaKind, page: int = 1) -> list[str]:
        """
        Recupere les identifiants en tendance cette semaine.

        Utilise le pattern cache-first sur le cache disque.
        """
        cache_key = f"tmdb:trending:{kind.value}:{page}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json(f"/trending/{kind.value}/week", {"page": page})
        try:
            ids = TmdbResultList.model_validate(data).ids()
        except ValidationError as e:
            raise UpstreamUnavailable("Invalid trending response") from e

        await self._cache.set_listing(cache_key, ids)
        return ids

    async def search_multi(self, query: str) -> list[str]:
        """
        Recherche amont sur les films et series.

        Les personnes renvoyees par /search/multi sont ecartees.
        """
        cache_key = f"tmdb:search_multi:{query.lower()}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json("/search/multi", {"query": query})
        try:
            results = TmdbResultList.model_validate(data)
        except ValidationError as e:
            raise UpstreamUnavailable("Invalid search response") from e
        ids = results.ids(media_types={MediaKind.MOVIE.value, MediaKind.SERIES.value})

        await self._cache.set_listing(cache_key, ids)
        return ids

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
