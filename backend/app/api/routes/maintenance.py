# backend/app/api/routes/maintenance.py
# Routes de maintenance (admin) : réconciliation des compteurs, enrollments orphelins.

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import Maintenance
from app.core.logging_config import extract_user_data
from app.core.security import CurrentUserEmail, require_admin

router = APIRouter(
    prefix="/api/maintenance", tags=["maintenance"], dependencies=[Depends(require_admin)]
)


@router.post(
    "/reconcile-participants",
    summary="Recalculer les compteurs de participants",
    description="Aligne `participants` de chaque challenge sur le nombre réel d’enrollments.",
)
async def reconcile_participants(
    request: Request, user_email: CurrentUserEmail, service: Maintenance
) -> dict[str, Any]:
    """Réconciliation des compteurs.

    Returns:
        dict: `{"checked", "corrected", "details"}`.
    """
    return await service.reconcile_participants(extract_user_data(user_email, request))


@router.get("/orphans", summary="Enrollments orphelins")
async def list_orphans(service: Maintenance) -> dict[str, Any]:
    orphans = await service.find_orphan_enrollments()
    return {"count": len(orphans), "items": orphans}
