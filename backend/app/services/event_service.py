# backend/app/services/event_service.py
# Service des événements communautaires (à venir / tous, détail, création).

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.core.bson_utils import as_doc_id, dump_mongo
from app.core.exceptions import NotFoundError
from app.core.utils import utcnow
from app.db.mongodb import EVENTS
from app.models.event import EventCreate


class EventService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def list_events(self, upcoming: bool = False, limit: int = 4) -> list[dict[str, Any]]:
        """Lister les événements par date croissante.

        Args:
            upcoming: Ne garder que les événements à partir de maintenant.
            limit: Nombre maximum d’événements.

        Returns:
            list[dict]: Événements.
        """
        query = {"date": {"$gte": utcnow()}} if upcoming else {}
        cursor = self.db[EVENTS].find(query).sort("date", ASCENDING).limit(limit)
        return await cursor.to_list(length=None)

    async def get_event(self, event_id: Any) -> dict[str, Any]:
        event = await self.db[EVENTS].find_one({"_id": as_doc_id(event_id)})
        if not event:
            raise NotFoundError("Event not found")
        return event

    async def create_event(self, payload: EventCreate) -> dict[str, Any]:
        now = utcnow()
        doc = {**dump_mongo(payload), "created_at": now, "updated_at": now}
        result = await self.db[EVENTS].insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc
