# backend/app/db/mongodb.py
# Cycle de vie du client MongoDB (créé par le point d'entrée) et dépendance FastAPI d'accès à la base.

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)

from app.core.settings import Settings

CHALLENGES = "challenges"
USER_CHALLENGES = "user_challenges"
TIPS = "tips"
EVENTS = "events"
USERS = "users"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Construit le client MongoDB à partir des settings.

    Description:
        Appelé une seule fois par le lifespan de l'application. Le client est
        `tz_aware` pour relire les dates en UTC.

    Args:
        settings (Settings): Configuration chargée.

    Returns:
        AsyncIOMotorClient: Client asynchrone (connexion paresseuse).
    """
    return AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Dépendance FastAPI : base MongoDB attachée à l'application.

    Args:
        request (Request): Requête courante.

    Returns:
        AsyncIOMotorDatabase: Base configurée au démarrage (`app.state.db`).
    """
    return request.app.state.db


@asynccontextmanager
async def transaction(
    db: AsyncIOMotorDatabase, enabled: bool
) -> AsyncIterator[AsyncIOMotorClientSession | None]:
    """Ouvre une transaction multi-documents si `enabled`, sinon ne fait rien.

    Description:
        Les appels de collection reçoivent `session=<valeur produite>`; `None` revient
        à des opérations mono-document indépendantes.

    Args:
        db (AsyncIOMotorDatabase): Base cible (son client porte la session).
        enabled (bool): Active la transaction (replica set requis).

    Yields:
        AsyncIOMotorClientSession | None: Session en transaction, ou None.
    """
    if not enabled:
        yield None
        return
    async with await db.client.start_session() as session:
        async with session.start_transaction():
            yield session
