"""
Routes de l'API JSON.

Chaque route delegue au MediaViewService du container ; les exceptions
sont traduites en reponses d'erreur par les handlers de web.errors.
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...core.exceptions import InvalidRequest
from ...services.embed import build_embed
from ...services.views import MediaViewService

router = APIRouter(prefix="/api")


def _views(request: Request) -> MediaViewService:
    return request.app.state.container.view_service()


@router.get("/home")
async def home(request: Request, page: int = 1):
    """Sections d'accueil (tendances, populaires, recents)."""
    return await _views(request).home(page)


@router.get("/trending")
async def trending(request: Request, type: Optional[str] = None, page: int = 1):
    """Tendances hebdomadaires TMDB (type=movie|tv)."""
    return await _views(request).trending(type, page)


@router.get("/search")
async def search(request: Request, q: Optional[str] = None):
    """Recherche par titre, completee par la recherche TMDB."""
    return await _views(request).search(q)


@router.get("/details")
async def details(request: Request, id: Optional[str] = None):
    """Fiche complete, reponse TMDB brute incluse."""
    return await _views(request).details(id)


@router.get("/random")
async def random_item(request: Request):
    """Un contenu du catalogue tire au hasard."""
    return await _views(request).random_item()


@router.get("/list")
async def list_page(request: Request, page: int = 1, limit: Optional[int] = None):
    """Page du catalogue complet."""
    return await _views(request).list_page(page, limit)


@router.get("/embed")
async def embed(
    request: Request,
    id: Optional[str] = None,
    season: Optional[str] = None,
    episode: Optional[str] = None,
):
    """URL du lecteur integre pour un film ou un episode."""
    settings = request.app.state.container.config()
    try:
        return build_embed(settings.embed_base_url, id, season, episode)
    except InvalidRequest as e:
        return JSONResponse({"success": False, "error": str(e)}, status_code=400)
