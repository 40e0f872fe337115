# backend/app/api/routes/user_challenges.py
# Routes "mes participations" : liste avec challenge, mise à jour de progression, départ.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path

from app.api.dependencies import Participation
from app.api.dto.response_format import SuccessResponse
from app.core.security import CurrentUserEmail, get_current_user_email
from app.models.user_challenge import UserChallenge, UserChallengeWithChallenge
from app.models.user_challenge_dto import ProgressOut, ProgressPatchIn

router = APIRouter(
    prefix="/api/user-challenges",
    tags=["user-challenges"],
    dependencies=[Depends(get_current_user_email)],
)

UcIdPath = Annotated[str, Path(..., description="Identifiant de l’enrollment.")]


@router.get(
    "/me",
    response_model=list[UserChallengeWithChallenge],
    summary="Lister mes participations",
    description="Chaque enrollment est accompagné de son challenge (`null` si supprimé).",
)
async def list_my_challenges(user_email: CurrentUserEmail, service: Participation):
    return await service.list_mine(user_email)


@router.patch(
    "/{uc_id}/progress",
    response_model=ProgressOut,
    summary="Mettre à jour ma progression",
    description=(
        "Met à jour un enrollment appartenant à l’appelant.\n\n"
        "- `progress` : borné à 0–100, `Finished` à 100\n"
        "- `addLogValue` : ajoute une contribution horodatée au journal\n"
        "- 403 si l’enrollment appartient à un autre utilisateur"
    ),
)
async def patch_progress(
    uc_id: UcIdPath,
    payload: Annotated[ProgressPatchIn, Body(...)],
    user_email: CurrentUserEmail,
    service: Participation,
):
    """Patch de progression.

    Args:
        uc_id (str): Identifiant de l’enrollment.
        payload (ProgressPatchIn): `progress` et/ou `addLogValue`.

    Returns:
        ProgressOut: Enrollment après mise à jour.
    """
    updated = await service.update_progress(
        uc_id,
        user_email,
        progress=payload.progress,
        add_log_value=payload.add_log_value,
    )
    return ProgressOut(updated=UserChallenge.model_validate(updated))


@router.delete(
    "/{uc_id}",
    response_model=SuccessResponse[None],
    summary="Quitter un challenge",
)
async def leave_challenge(uc_id: UcIdPath, user_email: CurrentUserEmail, service: Participation):
    await service.leave(uc_id, user_email)
    return SuccessResponse[None](message="Left challenge")
