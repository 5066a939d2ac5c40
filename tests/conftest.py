"""
Fixtures pytest partagees pour les tests MediaCache.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine SQLite temporaire avec tables creees
- Mock du port IMetadataProvider
- Horloge controlable
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Engine

from mediacache.config import Settings
from mediacache.core.ports.api_clients import IMetadataProvider
from mediacache.infrastructure.persistence.database import create_db_engine, init_db


class FakeClock:
    """Horloge manuelle: now() retourne l'instant courant, advance() le decale."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Horloge fixee au 1er juin 2024 a midi (UTC)."""
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base, le cache disque et
    les logs de chaque test.
    """
    return Settings(
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path / 'data' / 'test.db'}",
        api_cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "test.log",
        catalog_url="https://catalog.test/list.json",
        embed_base_url="https://player.test/embed/",
    )


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    """Engine SQLite fichier avec les tables creees, libere en fin de test."""
    resource = init_db(create_db_engine(f"sqlite:///{tmp_path / 'test.db'}"))
    yield next(resource)
    resource.close()


@pytest.fixture
def mock_provider() -> AsyncMock:
    """
    Mock de IMetadataProvider.

    Les valeurs de retour (probe, get_genres...) sont a configurer dans
    chaque test.
    """
    return AsyncMock(spec=IMetadataProvider)
