"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI et l'application
web : configuration, stockage, clients amont et services de resolution.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.catalog_client import CatalogClient
from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelGenreDirectoryRepository,
    SQLModelMediaRecordRepository,
)
from .services.genre_directory import GenreDirectoryService
from .services.resolution import ResolutionCoordinator
from .services.upstream_resolver import UpstreamResolver
from .services.views import MediaViewService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        record = await container.coordinator().resolve_item("550")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine partage, Resource pour la creation des tables
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Repositories - Singleton : chaque operation ouvre sa propre session
    media_record_repository = providers.Singleton(
        SQLModelMediaRecordRepository,
        engine=engine,
    )
    genre_directory_repository = providers.Singleton(
        SQLModelGenreDirectoryRepository,
        engine=engine,
    )

    # Cache API - listes amont uniquement (tendances, recherche)
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.api_cache_dir,
        ttl=config.provided.api_cache_ttl_seconds,
    )

    # Clients amont - Singleton pour partager les connexions HTTP
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.probe_timeout_seconds,
    )
    catalog_client = providers.Singleton(
        CatalogClient,
        url=config.provided.catalog_url,
        timeout=config.provided.probe_timeout_seconds,
    )

    # Services - Singleton : l'annuaire des genres et le single-flight
    # reposent sur un etat en memoire partage par toutes les requetes
    upstream_resolver = providers.Singleton(
        UpstreamResolver,
        provider=tmdb_client,
    )
    genre_directory = providers.Singleton(
        GenreDirectoryService,
        provider=tmdb_client,
        repository=genre_directory_repository,
        ttl=config.provided.genre_ttl,
        retry_backoff=config.provided.genre_retry_backoff,
    )
    coordinator = providers.Singleton(
        ResolutionCoordinator,
        repository=media_record_repository,
        resolver=upstream_resolver,
        genre_directory=genre_directory,
        record_ttl=config.provided.record_ttl,
        image_base_url=config.provided.image_base_url,
    )
    view_service = providers.Singleton(
        MediaViewService,
        coordinator=coordinator,
        catalog=catalog_client,
        provider=tmdb_client,
        repository=media_record_repository,
    )
