# backend/app/models/challenge.py
# Représentation d’un challenge (activité bornée dans le temps) et de son compteur de participants.

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from app.core.bson_utils import MongoBaseModel
from app.core.utils import utcnow
from app.models._shared import UTCDateTime


class ChallengeBase(BaseModel):
    """Champs descriptifs d’un challenge.

    Attributes:
        title (str): Titre.
        category (str): Catégorie (ex. « Waste Reduction »).
        description (str): Description textuelle.
        duration (int): Durée annoncée (jours).
        target (str): Objectif à atteindre (texte libre).
        impact_metric (str): Unité d’impact des logs (ex. « kg plastic saved »).
        image_url (str): Illustration.
        start_date (datetime): Début (UTC).
        end_date (datetime): Fin (UTC), strictement après le début.
    """

    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    duration: int = Field(gt=0)
    target: str = Field(min_length=1)
    impact_metric: str = ""
    image_url: str = Field(min_length=1)
    start_date: UTCDateTime
    end_date: UTCDateTime


class ChallengeCreate(ChallengeBase):
    """Payload de création d’un challenge.

    Description:
        Identique à `ChallengeBase`; le compteur `participants`, le créateur et les
        horodatages sont fixés par le service.
    """

    pass


class ChallengeUpdate(BaseModel):
    """Payload de mise à jour partielle (propriétaire uniquement).

    Description:
        Seuls les champs descriptifs sont modifiables : `participants`, `created_by`
        et `_id` ne figurent pas ici et sont donc ignorés.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, gt=0)
    target: Optional[str] = Field(default=None, min_length=1)
    impact_metric: Optional[str] = None
    image_url: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None


class Challenge(MongoBaseModel):
    """Document Mongo d’un challenge, tel que relu en base.

    Description:
        Lecture tolérante (les anciens documents peuvent omettre des champs);
        `participants` est le compteur dénormalisé des enrollments.
    """

    title: str = ""
    category: str = ""
    description: str = ""
    duration: Optional[int] = None
    target: str = ""
    impact_metric: str = ""
    image_url: str = ""
    participants: int = Field(default=0, ge=0)
    created_by: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    created_at: dt.datetime = Field(default_factory=lambda: utcnow())
    updated_at: Optional[dt.datetime] = None
