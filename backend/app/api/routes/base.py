# backend/app/api/routes/base.py
# Routes de base (racine, ping).

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "server is running"


@router.get(
    "/ping",
    tags=["Health"],
    summary="Vérification de santé de l’API",
    description="Retourne un message 'pong' permettant de tester que l’API répond.",
)
async def ping():
    """Health-check API.

    Description:
        Route basique permettant de vérifier la disponibilité de l’API, sans toucher la base.

    Returns:
        dict: Statut et message de réponse.
    """
    return {"status": "ok", "message": "pong"}
