"""
Traduction des exceptions en reponses JSON.

Toutes les erreurs portent un corps {"error": message} :
400 requete invalide, 502 API amont indisponible, 503 stockage
indisponible, 500 sinon.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.exceptions import (
    InvalidRequest,
    MediaCacheError,
    StorageUnavailable,
    UpstreamUnavailable,
)

_STATUS_CODES: dict[type[MediaCacheError], int] = {
    InvalidRequest: 400,
    UpstreamUnavailable: 502,
    StorageUnavailable: 503,
}


def status_for(exc: Exception) -> int:
    """Retourne le statut HTTP associe a une exception."""
    for exc_type, status_code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def _media_cache_error_handler(request: Request, exc: MediaCacheError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.warning("Requete en echec", path=request.url.path, status=status_code, error=str(exc))
    return JSONResponse({"error": str(exc)}, status_code=status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse({"error": details or "Invalid request"}, status_code=400)


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erreur inattendue", path=request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'exceptions sur l'application."""
    app.add_exception_handler(MediaCacheError, _media_cache_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
