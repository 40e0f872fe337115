# backend/app/services/user_service.py
# Service de gestion des profils utilisateur avec injection de dépendances.

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.bson_utils import dump_mongo
from app.core.exceptions import InvalidInputError, NotFoundError
from app.core.utils import utcnow
from app.db.mongodb import USERS
from app.models.user import UserCreate, UserUpdate


class UserService:
    """Service de gestion des profils utilisateur.

    Description:
        Les utilisateurs sont identifiés par leur email (même valeur que l’identité
        transmise par l’en-tête d’appel).
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialiser le service.

        Args:
            db: Instance de base de données MongoDB.
        """
        self.db = db

    async def create_user(self, payload: UserCreate) -> tuple[dict[str, Any], bool]:
        """Créer un utilisateur s’il n’existe pas encore (idempotent par email).

        Args:
            payload: Données du profil.

        Returns:
            tuple: (document, created) avec `created=False` si l’email existait déjà.
        """
        coll = self.db[USERS]
        existing = await coll.find_one({"email": payload.email})
        if existing:
            return existing, False

        doc = {**dump_mongo(payload), "created_at": utcnow()}
        try:
            result = await coll.insert_one(doc)
        except DuplicateKeyError:
            # création concurrente du même email
            return await coll.find_one({"email": payload.email}), False
        doc["_id"] = result.inserted_id
        return doc, True

    async def list_users(self) -> list[dict[str, Any]]:
        return await self.db[USERS].find({}).to_list(length=None)

    async def get_user(self, email: str) -> dict[str, Any]:
        user = await self.db[USERS].find_one({"email": email})
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, email: str, payload: UserUpdate) -> dict[str, Any]:
        """Mettre à jour un profil (l’email n’est jamais modifié).

        Raises:
            InvalidInputError: Aucun champ à modifier.
            NotFoundError: Utilisateur absent.
        """
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidInputError("No updatable fields provided")
        changes["updated_at"] = utcnow()

        updated = await self.db[USERS].find_one_and_update(
            {"email": email},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFoundError("User not found")
        return updated
