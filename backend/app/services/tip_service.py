# backend/app/services/tip_service.py
# Service des astuces : lecture des plus récentes, création, vote positif, suppression.

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from app.core.bson_utils import as_doc_id, dump_mongo
from app.core.exceptions import NotFoundError
from app.core.utils import utcnow
from app.db.mongodb import TIPS
from app.models.tip import TipCreate


class TipService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def list_tips(self, limit: int = 5) -> list[dict[str, Any]]:
        """Astuces les plus récentes d’abord, au plus `limit`."""
        cursor = self.db[TIPS].find({}).sort("created_at", DESCENDING).limit(limit)
        return await cursor.to_list(length=None)

    async def get_tip(self, tip_id: Any) -> dict[str, Any]:
        tip = await self.db[TIPS].find_one({"_id": as_doc_id(tip_id)})
        if not tip:
            raise NotFoundError("Tip not found")
        return tip

    async def create_tip(self, payload: TipCreate) -> dict[str, Any]:
        doc = {**dump_mongo(payload), "created_at": utcnow()}
        result = await self.db[TIPS].insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def upvote_tip(self, tip_id: Any) -> int:
        """Incrémente `upvotes` de 1.

        Returns:
            int: Nombre de documents modifiés.

        Raises:
            NotFoundError: Astuce absente.
        """
        result = await self.db[TIPS].update_one({"_id": as_doc_id(tip_id)}, {"$inc": {"upvotes": 1}})
        if result.matched_count == 0:
            raise NotFoundError("Tip not found")
        return result.modified_count

    async def delete_tip(self, tip_id: Any) -> int:
        result = await self.db[TIPS].delete_one({"_id": as_doc_id(tip_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Tip not found")
        return result.deleted_count
