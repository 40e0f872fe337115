# backend/app/models/user_challenge_dto.py
# Schémas I/O pour les routes de participation (join, progression, départ, liste).

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from app.models.user_challenge import UserChallenge

StrictNumber = Union[StrictInt, StrictFloat]


class ProgressPatchIn(BaseModel):
    """Entrée de mise à jour de progression.

    Attributes:
        progress (int | float | None): Nouveau pourcentage (borné à 0–100).
        add_log_value (int | float | None): Contribution à ajouter au journal
            (alias JSON `addLogValue` accepté).
    """

    progress: Optional[StrictNumber] = Field(
        default=None, description="Pourcentage 0–100 (borné côté serveur)."
    )
    add_log_value: Optional[StrictNumber] = Field(
        default=None,
        alias="addLogValue",
        description="Valeur ajoutée au journal de progression.",
    )

    model_config = ConfigDict(populate_by_name=True)


class JoinOut(BaseModel):
    """Réponse d’inscription à un challenge.

    Attributes:
        success (bool): Toujours vrai.
        already_joined (bool): Vrai si l’enrollment existait déjà.
        message (str): « Joined » ou « Already joined ».
        user_challenge (UserChallenge): Enrollment créé ou existant.
    """

    success: bool = True
    already_joined: bool
    message: str
    user_challenge: UserChallenge


class ProgressOut(BaseModel):
    success: bool = True
    updated: UserChallenge
