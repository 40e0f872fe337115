# backend/app/services/stats_service.py
# Service pour calculer les statistiques globales de la plateforme

import asyncio
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.api.dto.stats import PlatformStatsOut
from app.db.mongodb import CHALLENGES, EVENTS, TIPS, USER_CHALLENGES, USERS
from app.models.user_challenge import STATUS_ONGOING

TOTAL_LOGGED_PIPELINE: list[dict[str, Any]] = [
    {"$unwind": {"path": "$progress_logs", "preserveNullAndEmptyArrays": False}},
    {
        "$group": {
            "_id": None,
            "total": {"$sum": {"$toDouble": "$progress_logs.value"}},
        }
    },
]


class StatsService:
    """Agrégations en lecture seule sur l’ensemble des collections.

    Description:
        Photographie à un instant donné, sans garantie de cohérence vis-à-vis des
        écritures concurrentes. Une base vide donne des zéros partout.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def count_active_participants(self) -> int:
        """Nombre d’utilisateurs distincts ayant au moins un enrollment `Ongoing`."""
        users = await self.db[USER_CHALLENGES].distinct("user_id", {"status": STATUS_ONGOING})
        return len(users)

    async def total_logged_quantity(self) -> float:
        """Somme des valeurs de tous les journaux, tous statuts confondus."""
        docs = await self.db[USER_CHALLENGES].aggregate(TOTAL_LOGGED_PIPELINE).to_list(length=None)
        if not docs:
            return 0.0
        return float(docs[0].get("total") or 0)

    async def compute_stats(self) -> PlatformStatsOut:
        """Calculer les statistiques globales.

        Returns:
            PlatformStatsOut: Compteurs simples + participants actifs + quantité journalisée.
        """
        (
            total_challenges,
            total_tips,
            total_events,
            total_users,
        ) = await asyncio.gather(
            self.db[CHALLENGES].count_documents({}),
            self.db[TIPS].count_documents({}),
            self.db[EVENTS].count_documents({}),
            self.db[USERS].count_documents({}),
        )

        return PlatformStatsOut(
            total_challenges=total_challenges,
            total_tips=total_tips,
            total_events=total_events,
            total_users=total_users,
            active_participants=await self.count_active_participants(),
            total_logged_quantity=await self.total_logged_quantity(),
        )
