# backend/app/api/dependencies.py
# Fabriques de services injectées dans les routes (la base vient de `get_db`).

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.settings import get_settings
from app.db.mongodb import get_db
from app.services.challenge_service import ChallengeService
from app.services.event_service import EventService
from app.services.maintenance_service import MaintenanceService
from app.services.participation.participation_service import ParticipationService
from app.services.stats_service import StatsService
from app.services.tip_service import TipService
from app.services.user_service import UserService

Database = Annotated[AsyncIOMotorDatabase, Depends(get_db)]


def get_participation_service(db: Database) -> ParticipationService:
    return ParticipationService(db, use_transactions=get_settings().mongodb_transactions)


def get_challenge_service(db: Database) -> ChallengeService:
    return ChallengeService(db, use_transactions=get_settings().mongodb_transactions)


def get_stats_service(db: Database) -> StatsService:
    return StatsService(db)


def get_maintenance_service(db: Database) -> MaintenanceService:
    return MaintenanceService(db)


def get_tip_service(db: Database) -> TipService:
    return TipService(db)


def get_event_service(db: Database) -> EventService:
    return EventService(db)


def get_user_service(db: Database) -> UserService:
    return UserService(db)


Participation = Annotated[ParticipationService, Depends(get_participation_service)]
Challenges = Annotated[ChallengeService, Depends(get_challenge_service)]
Stats = Annotated[StatsService, Depends(get_stats_service)]
Maintenance = Annotated[MaintenanceService, Depends(get_maintenance_service)]
Tips = Annotated[TipService, Depends(get_tip_service)]
Events = Annotated[EventService, Depends(get_event_service)]
Users = Annotated[UserService, Depends(get_user_service)]
