# backend/app/models/tip.py
# Astuces éco-responsables publiées par les utilisateurs (lecture/écriture simples).

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from app.core.bson_utils import MongoBaseModel
from app.core.utils import utcnow


class TipCreate(BaseModel):
    title: str = ""
    content: str = ""
    category: str = ""
    author: str = ""
    author_name: str = ""
    upvotes: int = Field(default=0, ge=0)


class Tip(MongoBaseModel, TipCreate):
    """Document Mongo d’une astuce."""

    created_at: dt.datetime = Field(default_factory=lambda: utcnow())
