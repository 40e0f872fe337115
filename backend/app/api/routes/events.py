# backend/app/api/routes/events.py
# Routes des événements communautaires.

from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from app.api.dependencies import Events
from app.models.event import Event, EventCreate

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get(
    "",
    response_model=list[Event],
    summary="Lister les événements",
    description="Triés par date croissante ; `upcoming=true` ne garde que les événements à venir.",
)
async def list_events(
    service: Events,
    upcoming: bool = Query(False),
    limit: int = Query(4, ge=1, le=100),
):
    return await service.list_events(upcoming=upcoming, limit=limit)


@router.get("/{event_id}", response_model=Event, summary="Détail d’un événement")
async def get_event(event_id: str, service: Events):
    return await service.get_event(event_id)


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED, summary="Créer un événement")
async def create_event(payload: Annotated[EventCreate, Body(...)], service: Events):
    return await service.create_event(payload)
