# backend/app/services/maintenance_service.py
# Maintenance : réconciliation du compteur `participants` et détection des enrollments orphelins.

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.logging_config import get_loggers
from app.core.utils import utcnow
from app.db.mongodb import CHALLENGES, USER_CHALLENGES

COUNT_BY_CHALLENGE_PIPELINE: list[dict[str, Any]] = [
    {"$group": {"_id": "$challenge_id", "count": {"$sum": 1}}},
]


class MaintenanceService:
    """Réparations a posteriori des données dénormalisées.

    Description:
        Sans transaction, une panne entre l’écriture d’un enrollment et celle du
        compteur laisse `participants` décalé. La réconciliation recalcule le compteur
        depuis les enrollments réellement présents.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.logger, _, self.data_logger = get_loggers()

    async def reconcile_participants(self, user_data: dict[str, Any] | None = None) -> dict[str, Any]:
        """Recalculer `participants` pour chaque challenge.

        Args:
            user_data: Contexte de l’appelant (tracé dans le rapport).

        Returns:
            dict: `{"checked", "corrected", "details": [{challenge_id, before, after}]}`.
        """
        counts: dict[Any, int] = {}
        async for row in self.db[USER_CHALLENGES].aggregate(COUNT_BY_CHALLENGE_PIPELINE):
            counts[row["_id"]] = row["count"]

        checked = 0
        details: list[dict[str, Any]] = []
        async for ch in self.db[CHALLENGES].find({}, {"participants": 1}):
            checked += 1
            expected = counts.get(ch["_id"], 0)
            current = ch.get("participants", 0)
            if current == expected:
                continue
            await self.db[CHALLENGES].update_one(
                {"_id": ch["_id"]},
                {"$set": {"participants": expected, "updated_at": utcnow()}},
            )
            self.logger.warning(
                "participants drift on challenge %s: %s -> %s", ch["_id"], current, expected
            )
            details.append({"challenge_id": str(ch["_id"]), "before": current, "after": expected})

        report = {"checked": checked, "corrected": len(details), "details": details}
        self.data_logger.log_data(
            "maintenance.reconcile_participants",
            report,
            user_data,
        )
        return report

    async def find_orphan_enrollments(self) -> list[dict[str, Any]]:
        """Enrollments dont le challenge n’existe plus (`{id, user_id, challenge_id}`)."""
        valid_ids = await self.db[CHALLENGES].distinct("_id")
        cursor = self.db[USER_CHALLENGES].find(
            {"challenge_id": {"$nin": valid_ids}},
            {"_id": 1, "user_id": 1, "challenge_id": 1},
        )
        return [
            {
                "id": str(doc["_id"]),
                "user_id": doc.get("user_id"),
                "challenge_id": str(doc.get("challenge_id")),
            }
            async for doc in cursor
        ]
