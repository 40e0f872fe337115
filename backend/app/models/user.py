# backend/app/models/user.py
# Schémas utilisateur : document Mongo, payloads de création et de mise à jour.

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, EmailStr, Field

from app.core.bson_utils import MongoBaseModel
from app.core.utils import utcnow


class UserCreate(BaseModel):
    """Payload de création (idempotent par email).

    Attributes:
        email (EmailStr): Email unique, sert d’identité.
        display_name (str | None): Nom affiché.
        photo_url (str | None): Avatar.
        role (str): Rôle ('user' par défaut).
        eco_points (int): Points initiaux.
    """

    email: EmailStr
    display_name: str | None = None
    photo_url: str | None = None
    role: str = "user"
    eco_points: int = Field(default=0, ge=0)


class UserUpdate(BaseModel):
    """Payload de mise à jour (l’email et le rôle ne sont pas modifiables)."""

    display_name: str | None = None
    photo_url: str | None = None
    eco_points: int | None = Field(default=None, ge=0)


class User(MongoBaseModel):
    """Document Mongo utilisateur."""

    email: str
    display_name: str | None = None
    photo_url: str | None = None
    role: str = "user"
    eco_points: int = 0

    created_at: dt.datetime = Field(default_factory=lambda: utcnow())
    updated_at: dt.datetime | None = None
