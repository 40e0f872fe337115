# backend/app/api/routes/challenges.py
# Routes challenges : recherche, détail, création/modification/suppression par le créateur, inscription.

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Body, Path, Query, Response, status

from app.api.dependencies import Challenges, Participation
from app.api.dto.response_format import SuccessResponse
from app.core.security import CurrentUserEmail
from app.models.challenge import Challenge, ChallengeCreate, ChallengeUpdate
from app.models.user_challenge import UserChallenge
from app.models.user_challenge_dto import JoinOut
from app.services.challenge_service import ChallengeFilters

router = APIRouter(prefix="/api/challenges", tags=["challenges"])

ChallengeIdPath = Annotated[str, Path(..., description="Identifiant du challenge.")]


@router.get(
    "",
    response_model=list[Challenge],
    summary="Rechercher des challenges",
    description=(
        "Liste les challenges, les plus récents d’abord.\n\n"
        "- `category` : liste séparée par des virgules\n"
        "- bornes de dates et de participants\n"
        "- `search` : titre/description, insensible à la casse\n"
        "- `status=ongoing` : challenges en cours"
    ),
)
async def list_challenges(
    service: Challenges,
    category: Optional[str] = Query(None, description="Catégories (a,b,c)."),
    start_date_gte: Optional[datetime] = Query(None),
    end_date_lte: Optional[datetime] = Query(None),
    participants_gte: Optional[int] = Query(None, ge=0),
    participants_lte: Optional[int] = Query(None, ge=0),
    search: Optional[str] = Query(None, description="Texte recherché."),
    status_filter: Optional[Literal["ongoing"]] = Query(None, alias="status"),
):
    filters = ChallengeFilters(
        category=category,
        start_date_gte=start_date_gte,
        end_date_lte=end_date_lte,
        participants_gte=participants_gte,
        participants_lte=participants_lte,
        search=search,
        status=status_filter,
    )
    return await service.list_challenges(filters)


@router.get("/{challenge_id}", response_model=Challenge, summary="Détail d’un challenge")
async def get_challenge(challenge_id: ChallengeIdPath, service: Challenges):
    return await service.get_challenge(challenge_id)


@router.post(
    "",
    response_model=Challenge,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un challenge",
    description="Crée un challenge dont l’appelant devient le propriétaire (`participants` = 0).",
)
async def create_challenge(
    payload: Annotated[ChallengeCreate, Body(...)],
    user_email: CurrentUserEmail,
    service: Challenges,
):
    return await service.create_challenge(payload, user_email)


@router.patch(
    "/{challenge_id}",
    response_model=Challenge,
    summary="Modifier un challenge (propriétaire)",
)
async def update_challenge(
    challenge_id: ChallengeIdPath,
    payload: Annotated[ChallengeUpdate, Body(...)],
    user_email: CurrentUserEmail,
    service: Challenges,
):
    return await service.update_challenge(challenge_id, payload, user_email)


@router.delete(
    "/{challenge_id}",
    response_model=SuccessResponse[dict],
    summary="Supprimer un challenge (propriétaire)",
    description="Supprime le challenge et tous ses enrollments.",
)
async def delete_challenge(
    challenge_id: ChallengeIdPath,
    user_email: CurrentUserEmail,
    service: Challenges,
):
    result = await service.delete_challenge(challenge_id, user_email)
    return SuccessResponse[dict](data=result, message="Challenge deleted")


@router.post(
    "/join/{challenge_id}",
    response_model=JoinOut,
    status_code=status.HTTP_201_CREATED,
    summary="Rejoindre un challenge",
    description=(
        "Inscrit l’appelant au challenge.\n\n"
        "- 201 : inscription créée, `participants` incrémenté\n"
        "- 200 : déjà inscrit, rien ne change"
    ),
)
async def join_challenge(
    challenge_id: ChallengeIdPath,
    user_email: CurrentUserEmail,
    service: Participation,
    response: Response,
):
    """Rejoindre un challenge.

    Description:
        Opération idempotente : un second appel renvoie l’enrollment existant avec
        le statut 200.

    Args:
        challenge_id (str): Identifiant du challenge.

    Returns:
        JoinOut: Enrollment et indicateur `already_joined`.
    """
    doc, created = await service.join(challenge_id, user_email)
    if not created:
        response.status_code = status.HTTP_200_OK
    return JoinOut(
        already_joined=not created,
        message="Joined" if created else "Already joined",
        user_challenge=UserChallenge.model_validate(doc),
    )
