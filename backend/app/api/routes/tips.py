# backend/app/api/routes/tips.py
# Routes des astuces.

from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from app.api.dependencies import Tips
from app.api.dto.response_format import CountResult, SuccessResponse
from app.models.tip import Tip, TipCreate

router = APIRouter(prefix="/api/tips", tags=["tips"])


@router.get("", response_model=list[Tip], summary="Dernières astuces")
async def list_tips(service: Tips, limit: int = Query(5, ge=1, le=100)):
    return await service.list_tips(limit=limit)


@router.get("/{tip_id}", response_model=Tip, summary="Détail d’une astuce")
async def get_tip(tip_id: str, service: Tips):
    return await service.get_tip(tip_id)


@router.post("", response_model=Tip, status_code=status.HTTP_201_CREATED, summary="Publier une astuce")
async def create_tip(payload: Annotated[TipCreate, Body(...)], service: Tips):
    return await service.create_tip(payload)


@router.patch("/{tip_id}/upvote", response_model=SuccessResponse[CountResult], summary="Voter pour une astuce")
async def upvote_tip(tip_id: str, service: Tips):
    modified = await service.upvote_tip(tip_id)
    return SuccessResponse[CountResult](data=CountResult(count=modified), message="Tip upvoted")


@router.delete("/{tip_id}", response_model=SuccessResponse[CountResult], summary="Supprimer une astuce")
async def delete_tip(tip_id: str, service: Tips):
    deleted = await service.delete_tip(tip_id)
    return SuccessResponse[CountResult](data=CountResult(count=deleted), message="Tip deleted")
