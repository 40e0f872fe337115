# backend/app/services/participation/enrollment_query.py
# Requêtes de lecture sur les enrollments (par paire, par utilisateur avec challenge joint).

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.db.mongodb import CHALLENGES, USER_CHALLENGES


class EnrollmentQuery:
    """Service de requêtes pour les enrollments."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def find_by_pair(self, user_id: str, challenge_id: Any) -> dict[str, Any] | None:
        return await self.db[USER_CHALLENGES].find_one(
            {"user_id": user_id, "challenge_id": challenge_id}
        )

    async def list_with_challenge(self, user_id: str) -> list[dict[str, Any]]:
        """Lister les enrollments d’un utilisateur, chacun avec son challenge.

        Description:
            Les challenges référencés sont chargés en une seule requête `$in`. Un
            challenge disparu donne `challenge = None` sans faire échouer la liste.

        Args:
            user_id: Identité de l’utilisateur.

        Returns:
            list[dict]: Enrollments (ordre d’inscription) enrichis d’une clé `challenge`.
        """
        cursor = self.db[USER_CHALLENGES].find({"user_id": user_id}).sort("join_date", ASCENDING)
        enrollments = await cursor.to_list(length=None)
        if not enrollments:
            return []

        challenge_ids = list({uc["challenge_id"] for uc in enrollments})
        challenges = await (
            self.db[CHALLENGES].find({"_id": {"$in": challenge_ids}}).to_list(length=None)
        )
        by_id = {ch["_id"]: ch for ch in challenges}

        return [{**uc, "challenge": by_id.get(uc["challenge_id"])} for uc in enrollments]
