"""
Tests unitaires pour APICache.

Ces tests verifient:
- Stockage et recuperation de valeurs
- TTL configurable des listes amont (desactivable avec 0)
- Nettoyage du cache
"""

from pathlib import Path

import pytest

from mediacache.adapters.api.cache import APICache


class TestAPICache:
    """Tests pour la classe APICache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> APICache:
        """Cree un cache avec un repertoire temporaire."""
        cache = APICache(cache_dir=str(tmp_path / "test_cache"), ttl=600)
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing_key(self, cache: APICache) -> None:
        assert await cache.get("nonexistent_key") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: APICache) -> None:
        await cache.set("tmdb:trending:movie:1", ["550", "603"], ttl=3600)
        assert await cache.get("tmdb:trending:movie:1") == ["550", "603"]

    def test_default_ttl_is_ten_minutes(self) -> None:
        assert APICache.DEFAULT_TTL == 600

    @pytest.mark.asyncio
    async def test_set_listing_uses_configured_ttl(self, cache: APICache) -> None:
        await cache.set_listing("tmdb:search_multi:matrix", ["603"])
        assert cache.ttl == 600
        assert await cache.get("tmdb:search_multi:matrix") == ["603"]

    @pytest.mark.asyncio
    async def test_set_listing_disabled_with_zero_ttl(self, tmp_path: Path) -> None:
        cache = APICache(cache_dir=str(tmp_path / "no_cache"), ttl=0)
        try:
            await cache.set_listing("key", ["1"])
            assert await cache.get("key") is None
        finally:
            cache.close()

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, cache: APICache) -> None:
        await cache.set("a", 1, ttl=60)
        await cache.set("b", 2, ttl=60)

        await cache.clear()

        assert await cache.get("a") is None
        assert await cache.get("b") is None
