"""
Application FastAPI de Vitrine.

Expose les opérations d'agrégation à la couche UI et convertit les erreurs
du domaine en réponses JSON {code, message}.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..container import Container
from ..core.errors import VitrineError
from .routes.actions import router as actions_router

# Statut HTTP par code d'erreur
_ERROR_STATUS = {
    "CONFIGURATION_MISSING": 500,
    "NOT_FOUND": 404,
    "UPSTREAM_ERROR": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et ferme les clients à l'arrêt."""
    container = Container()
    app.state.container = container
    yield
    await container.hevy_client().close()
    await container.lastfm_client().close()
    await container.tmdb_client().close()
    await container.trakt_http().aclose()
    await container.credential_store().close()


app = FastAPI(title="Vitrine", lifespan=lifespan)


@app.exception_handler(VitrineError)
async def vitrine_error_handler(request: Request, exc: VitrineError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(exc.code, 500)
    logger.warning(f"{request.url.path} -> {exc.code}: {exc.message}")
    return JSONResponse(exc.to_dict(), status_code=status_code)


app.include_router(actions_router)
