# backend/app/services/challenge_service.py
# Service de gestion des challenges : recherche filtrée, création, modification et suppression par le créateur.

from __future__ import annotations

import datetime as dt
import re
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, Field
from pymongo import DESCENDING, ReturnDocument

from app.core.bson_utils import as_doc_id, dump_mongo
from app.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from app.core.logging_config import get_loggers
from app.core.utils import utcnow
from app.db.mongodb import CHALLENGES, USER_CHALLENGES, transaction
from app.models._shared import UTCDateTime
from app.models.challenge import ChallengeCreate, ChallengeUpdate

SEARCH_MAX_LENGTH = 120


class ChallengeFilters(BaseModel):
    """Filtres de recherche des challenges.

    Attributes:
        category (str | None): Catégories séparées par des virgules.
        start_date_gte (datetime | None): Début au plus tôt.
        end_date_lte (datetime | None): Fin au plus tard.
        participants_gte (int | None): Participants minimum.
        participants_lte (int | None): Participants maximum.
        search (str | None): Texte recherché dans titre/description (insensible à la casse).
        status (str | None): `ongoing` pour les challenges en cours.
    """

    category: str | None = None
    start_date_gte: UTCDateTime | None = None
    end_date_lte: UTCDateTime | None = None
    participants_gte: int | None = Field(default=None, ge=0)
    participants_lte: int | None = Field(default=None, ge=0)
    search: str | None = None
    status: str | None = None


def check_date_order(start_date: dt.datetime | None, end_date: dt.datetime | None) -> None:
    """Lève `InvalidInputError` si la fin n’est pas strictement après le début."""
    if start_date is not None and end_date is not None and end_date <= start_date:
        raise InvalidInputError("end_date must be after start_date")


class ChallengeService:
    """Service CRUD des challenges.

    Description:
        Seul le créateur (`created_by`) peut modifier ou supprimer un challenge. La
        suppression emporte les enrollments du challenge.
    """

    def __init__(self, db: AsyncIOMotorDatabase, use_transactions: bool = False):
        self.db = db
        self.use_transactions = use_transactions
        self.logger, _, _ = get_loggers()

    @staticmethod
    def build_query(filters: ChallengeFilters, now: dt.datetime | None = None) -> dict[str, Any]:
        """Construire le filtre MongoDB correspondant aux critères.

        Args:
            filters: Critères de recherche.
            now: Référence temporelle pour `status=ongoing` (défaut : maintenant).

        Returns:
            dict: Filtre MongoDB.
        """
        q: dict[str, Any] = {}

        if filters.category:
            categories = [c.strip() for c in filters.category.split(",") if c.strip()]
            if categories:
                q["category"] = {"$in": categories}

        start_cond: dict[str, Any] = {}
        end_cond: dict[str, Any] = {}
        if filters.start_date_gte:
            start_cond["$gte"] = filters.start_date_gte
        if filters.end_date_lte:
            end_cond["$lte"] = filters.end_date_lte
        if filters.status == "ongoing":
            now = now or utcnow()
            start_cond["$lte"] = now
            end_cond["$gte"] = now
        if start_cond:
            q["start_date"] = start_cond
        if end_cond:
            q["end_date"] = end_cond

        participants: dict[str, Any] = {}
        if filters.participants_gte is not None:
            participants["$gte"] = filters.participants_gte
        if filters.participants_lte is not None:
            participants["$lte"] = filters.participants_lte
        if participants:
            q["participants"] = participants

        if filters.search:
            pattern = re.escape(filters.search[:SEARCH_MAX_LENGTH])
            q["$or"] = [
                {"title": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}},
            ]

        return q

    async def list_challenges(self, filters: ChallengeFilters) -> list[dict[str, Any]]:
        cursor = self.db[CHALLENGES].find(self.build_query(filters)).sort("created_at", DESCENDING)
        return await cursor.to_list(length=None)

    async def get_challenge(self, challenge_id: Any) -> dict[str, Any]:
        doc = await self.db[CHALLENGES].find_one({"_id": as_doc_id(challenge_id)})
        if not doc:
            raise NotFoundError("Challenge not found")
        return doc

    async def _get_owned(self, challenge_id: Any, user_id: str, action: str) -> dict[str, Any]:
        doc = await self.get_challenge(challenge_id)
        if doc.get("created_by") != user_id:
            raise ForbiddenError(f"Forbidden: only owner can {action}")
        return doc

    async def create_challenge(self, payload: ChallengeCreate, user_id: str) -> dict[str, Any]:
        """Créer un challenge pour l’appelant.

        Description:
            Le compteur `participants` démarre toujours à 0 : il ne reflète que les
            enrollments réels.

        Args:
            payload: Champs descriptifs validés.
            user_id: Identité du créateur.

        Returns:
            dict: Document inséré (avec `_id`).
        """
        check_date_order(payload.start_date, payload.end_date)

        now = utcnow()
        doc = {
            **dump_mongo(payload),
            "participants": 0,
            "created_by": user_id,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.db[CHALLENGES].insert_one(doc)
        doc["_id"] = result.inserted_id
        self.logger.info("Challenge %s created by %s", result.inserted_id, user_id)
        return doc

    async def update_challenge(
        self, challenge_id: Any, payload: ChallengeUpdate, user_id: str
    ) -> dict[str, Any]:
        """Modifier les champs descriptifs d’un challenge (créateur uniquement).

        Description:
            L’ordre des dates est vérifié sur le résultat fusionné (valeurs envoyées,
            sinon valeurs existantes).

        Returns:
            dict: Document après mise à jour.
        """
        existing = await self._get_owned(challenge_id, user_id, "update")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        check_date_order(
            changes.get("start_date", existing.get("start_date")),
            changes.get("end_date", existing.get("end_date")),
        )
        changes["updated_at"] = utcnow()

        updated = await self.db[CHALLENGES].find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFoundError("Challenge not found")
        return updated

    async def delete_challenge(self, challenge_id: Any, user_id: str) -> dict[str, int]:
        """Supprimer un challenge et ses enrollments (créateur uniquement).

        Returns:
            dict: `{"deleted_count", "enrollments_deleted"}`.
        """
        existing = await self._get_owned(challenge_id, user_id, "delete")

        async with transaction(self.db, self.use_transactions) as session:
            result = await self.db[CHALLENGES].delete_one({"_id": existing["_id"]}, session=session)
            removed = await self.db[USER_CHALLENGES].delete_many(
                {"challenge_id": existing["_id"]}, session=session
            )

        self.logger.info(
            "Challenge %s deleted by %s (%s enrollments removed)",
            existing["_id"],
            user_id,
            removed.deleted_count,
        )
        return {
            "deleted_count": result.deleted_count,
            "enrollments_deleted": removed.deleted_count,
        }
