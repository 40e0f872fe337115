# backend/app/services/participation/participation_service.py
# Service principal de participation : rejoindre, progresser, quitter, lister ses challenges.

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.bson_utils import as_doc_id
from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import get_loggers
from app.core.utils import utcnow
from app.db.mongodb import CHALLENGES, USER_CHALLENGES, transaction

from .enrollment_query import EnrollmentQuery
from .enrollment_validator import EnrollmentValidator
from .progress_rules import ProgressRules


class ParticipationService:
    """Service principal de gestion des enrollments.

    Description:
        Orchestre les écritures croisées entre `user_challenges` et le compteur
        `participants` de `challenges`. Avec `use_transactions`, l’enrollment et le
        compteur sont modifiés dans une même transaction; sinon ce sont deux écritures
        mono-document, et un écart éventuel est corrigé par la réconciliation
        (`MaintenanceService.reconcile_participants`).
    """

    def __init__(self, db: AsyncIOMotorDatabase, use_transactions: bool = False):
        """Initialiser le service.

        Args:
            db: Instance de base de données MongoDB.
            use_transactions: Regrouper enrollment + compteur dans une transaction.
        """
        self.db = db
        self.use_transactions = use_transactions

        self.rules = ProgressRules()
        self.query = EnrollmentQuery(db)
        self.validator = EnrollmentValidator(db)
        self.logger, _, _ = get_loggers()

    async def join(self, challenge_id: Any, user_id: str) -> tuple[dict[str, Any], bool]:
        """Inscrire l’appelant à un challenge (idempotent).

        Description:
            - Challenge absent : `NotFoundError`.
            - Enrollment déjà présent : renvoyé tel quel, compteur inchangé.
            - Sinon : insertion (Ongoing, 0 %, journal vide) puis `participants += 1`.
            L’index unique `(user_id, challenge_id)` fait échouer une insertion
            concurrente; l’enrollment gagnant est alors renvoyé comme « déjà inscrit ».

        Args:
            challenge_id: Identifiant brut du challenge.
            user_id: Identité de l’appelant.

        Returns:
            tuple: (enrollment, created) avec `created=False` si déjà inscrit.
        """
        challenge = await self.db[CHALLENGES].find_one({"_id": as_doc_id(challenge_id)})
        if not challenge:
            raise NotFoundError("Challenge not found")
        stored_challenge_id = challenge["_id"]

        existing = await self.query.find_by_pair(user_id, stored_challenge_id)
        if existing:
            return existing, False

        doc = self.rules.new_enrollment(user_id, stored_challenge_id, utcnow())
        try:
            async with transaction(self.db, self.use_transactions) as session:
                result = await self.db[USER_CHALLENGES].insert_one(doc, session=session)
                await self.db[CHALLENGES].update_one(
                    {"_id": stored_challenge_id},
                    {"$inc": {"participants": 1}},
                    session=session,
                )
        except DuplicateKeyError:
            existing = await self.query.find_by_pair(user_id, stored_challenge_id)
            if existing is None:
                raise ConflictError("Concurrent join in progress, please retry") from None
            return existing, False

        doc["_id"] = result.inserted_id
        self.logger.info("User %s joined challenge %s", user_id, stored_challenge_id)
        return doc, True

    async def update_progress(
        self,
        uc_id: Any,
        user_id: str,
        progress: float | None = None,
        add_log_value: float | None = None,
    ) -> dict[str, Any]:
        """Mettre à jour la progression d’un enrollment (propriétaire uniquement).

        Description:
            `progress` est autoritaire (borné, statut recalculé); `add_log_value` ajoute
            une entrée au journal sans changer le pourcentage. Les deux sont appliqués
            dans une seule écriture atomique avec `last_updated`.

        Args:
            uc_id: Identifiant brut de l’enrollment.
            user_id: Identité de l’appelant.
            progress: Nouveau pourcentage (optionnel).
            add_log_value: Contribution à journaliser (optionnel).

        Returns:
            dict: Enrollment après mise à jour.
        """
        uc = await self.validator.get_owned_enrollment(uc_id, user_id)
        self.validator.validate_progress_values(progress, add_log_value)

        update = self.rules.build_progress_update(progress, add_log_value, utcnow())
        updated = await self.db[USER_CHALLENGES].find_one_and_update(
            {"_id": uc["_id"], "user_id": user_id},
            update,
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            # supprimé entre la lecture et l'écriture
            raise NotFoundError("UserChallenge not found")

        self.logger.info(
            "User %s updated progress on %s (progress=%s, log=%s)",
            user_id,
            uc["_id"],
            progress,
            add_log_value,
        )
        return updated

    async def leave(self, uc_id: Any, user_id: str) -> None:
        """Quitter un challenge : supprime l’enrollment puis décrémente le compteur.

        Description:
            La décrémentation ne s’applique que si `participants > 0`, le compteur ne
            devient donc jamais négatif.

        Args:
            uc_id: Identifiant brut de l’enrollment.
            user_id: Identité de l’appelant.
        """
        uc = await self.validator.get_owned_enrollment(uc_id, user_id)

        async with transaction(self.db, self.use_transactions) as session:
            result = await self.db[USER_CHALLENGES].delete_one(
                {"_id": uc["_id"], "user_id": user_id}, session=session
            )
            if result.deleted_count == 0:
                raise NotFoundError("UserChallenge not found")
            await self.db[CHALLENGES].update_one(
                {"_id": uc["challenge_id"], "participants": {"$gt": 0}},
                {"$inc": {"participants": -1}},
                session=session,
            )

        self.logger.info("User %s left challenge %s", user_id, uc["challenge_id"])

    async def list_mine(self, user_id: str) -> list[dict[str, Any]]:
        return await self.query.list_with_challenge(user_id)
