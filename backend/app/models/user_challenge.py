# backend/app/models/user_challenge.py
# Participation d’un utilisateur à un challenge : statut, progression (0–100) et journal des contributions.

from __future__ import annotations

import datetime as dt
import math
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field

from app.core.bson_utils import DocId, MongoBaseModel
from app.core.utils import utcnow
from app.models.challenge import Challenge

STATUS_ONGOING = "Ongoing"
STATUS_FINISHED = "Finished"

EnrollmentStatus = Literal["Ongoing", "Finished"]


def _coerce_progress(v: Any) -> Any:
    # Anciens documents : progression stockée en float (ex. 45.5) ou hors bornes.
    if isinstance(v, bool):
        return v
    if isinstance(v, int) or (isinstance(v, float) and math.isfinite(v)):
        return int(min(100, max(0, v)))
    return v


Progress = Annotated[int, BeforeValidator(_coerce_progress)]


class ProgressLog(BaseModel):
    """Contribution horodatée (append-only).

    Attributes:
        date (datetime): Horodatage d’ajout (UTC).
        value (float): Quantité contribuée (unité = `impact_metric` du challenge).
    """

    date: dt.datetime
    value: float


class UserChallenge(MongoBaseModel):
    """Document Mongo « UserChallenge » (enrollment).

    Description:
        Un seul document par paire (user_id, challenge_id). `status` vaut `Finished`
        si et seulement si `progress >= 100`.

    Attributes:
        user_id (str): Identité propriétaire.
        challenge_id (ObjectId | str): Réf. challenge (pas de propriété).
        status (Literal['Ongoing','Finished']): Statut dérivé de `progress`.
        progress (int): Avancement 0–100.
        progress_logs (list[ProgressLog]): Journal ordonné des contributions.
        join_date (datetime): Date d’inscription.
        last_updated (datetime): Dernière modification.
    """

    user_id: str
    challenge_id: DocId
    status: EnrollmentStatus = STATUS_ONGOING
    progress: Progress = Field(default=0, ge=0, le=100)
    progress_logs: list[ProgressLog] = Field(default_factory=list)
    join_date: dt.datetime = Field(default_factory=lambda: utcnow())
    last_updated: dt.datetime = Field(default_factory=lambda: utcnow())


class UserChallengeWithChallenge(UserChallenge):
    """Enrollment accompagné de son challenge (`None` si le challenge n’existe plus)."""

    challenge: Optional[Challenge] = None
