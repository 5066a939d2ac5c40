"""
Application FastAPI de MediaCache.

Initialise l'application web avec le Container DI, enregistre les handlers
d'erreurs et monte les routes de l'API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from .. import __version__
from ..container import Container
from .errors import register_error_handlers
from .routes.api import router as api_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container a utiliser (un nouveau par defaut ; les tests
            fournissent le leur avec des providers surcharges)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage et le ferme à l'arrêt."""
        app_container = container if container is not None else Container()
        app_container.database.init()
        app.state.container = app_container
        logger.info("Demarrage de l'API", version=__version__)
        yield
        await app_container.tmdb_client().close()
        await app_container.catalog_client().close()
        app_container.api_cache().close()
        app_container.shutdown_resources()

    app = FastAPI(title="MediaCache", version=__version__, lifespan=lifespan)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(api_router)
    return app


app = create_app()
