# backend/app/models/event.py
# Événements communautaires (date, lieu, capacité).

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from app.core.bson_utils import MongoBaseModel
from app.core.utils import utcnow
from app.models._shared import UTCDateTime


class EventCreate(BaseModel):
    """Payload de création d’un événement.

    Attributes:
        title (str): Titre.
        description (str): Description.
        date (datetime): Date de l’événement (UTC).
        location (str): Lieu.
        organizer (str): Organisateur.
        max_participants (int): Capacité (≥ 1).
        current_participants (int): Inscrits déclarés.
    """

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: UTCDateTime
    location: str = Field(min_length=1)
    organizer: str = Field(min_length=1)
    max_participants: int = Field(ge=1)
    current_participants: int = Field(default=0, ge=0)


class Event(MongoBaseModel):
    title: str = ""
    description: str = ""
    date: Optional[dt.datetime] = None
    location: str = ""
    organizer: str = ""
    max_participants: int = 0
    current_participants: int = 0
    created_at: dt.datetime = Field(default_factory=lambda: utcnow())
    updated_at: Optional[dt.datetime] = None
