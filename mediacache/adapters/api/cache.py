"""
Cache disque pour les listes renvoyees par l'API amont.

Le cache utilise diskcache pour la persistence sur disque. Il ne stocke que
des listes d'identifiants (pages de tendances, resultats de recherche amont) :
les fiches resolues et l'annuaire des genres vivent en base de donnees.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut des listes (10 minutes)

    Example:
        cache = APICache(cache_dir=".cache/api", ttl=600)
        await cache.set_listing("tmdb:trending:movie:1", ["550", "680"])
        ids = await cache.get("tmdb:trending:movie:1")
    """

    DEFAULT_TTL = 10 * 60

    def __init__(self, cache_dir: str = ".cache/api", ttl: int = DEFAULT_TTL) -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
            ttl: Duree de vie des listes en secondes (0 = pas de mise en cache)
        """
        self._cache = Cache(str(cache_dir))
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        return self._ttl

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur dans le cache avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_listing(self, key: str, value: Any) -> None:
        """Stocke une liste amont avec le TTL configure (ignore si TTL nul)."""
        if self._ttl <= 0:
            return
        await self.set(key, value, self._ttl)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
