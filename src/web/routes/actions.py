"""
Routes des opérations d'agrégation.

Chaque route accepte {forceRefresh?, limit?} et retourne le résultat normalisé
du service, ou une erreur {code, message} (voir web/app.py).
"""

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter(prefix="/actions")


class ActionInput(BaseModel):
    """Entrée commune des opérations."""

    model_config = ConfigDict(populate_by_name=True)

    force_refresh: bool = Field(default=False, alias="forceRefresh")
    limit: Optional[int] = Field(default=None, ge=1, le=100)


def _container(request: Request):
    return request.app.state.container


@router.post("/fitness")
async def get_fitness(request: Request, body: ActionInput) -> dict[str, Any]:
    """Routines du dossier "Current" et statistiques Hevy."""
    service = _container(request).fitness_service()
    return await service.get(force_refresh=body.force_refresh, limit=body.limit)


@router.post("/scrobbles")
async def get_scrobbles(request: Request, body: ActionInput) -> dict[str, Any]:
    """Derniers titres écoutés et statistiques Last.fm."""
    service = _container(request).scrobble_service()
    return await service.get(force_refresh=body.force_refresh, limit=body.limit)


@router.post("/watch-history")
async def get_watch_history(request: Request, body: ActionInput) -> dict[str, Any]:
    """Historique Trakt enrichi des posters TMDB."""
    service = _container(request).watch_history_service()
    return await service.get(force_refresh=body.force_refresh, limit=body.limit)
