# backend/app/api/routes/stats.py
# Statistiques globales de la plateforme.

from fastapi import APIRouter

from app.api.dependencies import Stats
from app.api.dto.stats import PlatformStatsOut

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get(
    "",
    response_model=PlatformStatsOut,
    summary="Statistiques de la plateforme",
    description=(
        "Compteurs globaux, nombre d’utilisateurs distincts ayant un enrollment `Ongoing` "
        "et somme de toutes les contributions journalisées."
    ),
)
async def get_stats(service: Stats):
    return await service.compute_stats()
