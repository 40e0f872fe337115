# backend/app/services/participation/enrollment_validator.py
# Validation des opérations sur les enrollments : existence, propriété, valeurs numériques.

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.bson_utils import as_doc_id
from app.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from app.core.utils import is_real_number
from app.db.mongodb import USER_CHALLENGES


class EnrollmentValidator:
    """Service de validation pour les enrollments.

    Description:
        Vérifie qu’un enrollment existe et appartient à l’appelant avant toute écriture,
        et que les valeurs de progression sont des nombres finis.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialiser le service de validation.

        Args:
            db: Instance de base de données MongoDB.
        """
        self.db = db

    async def get_owned_enrollment(self, uc_id: Any, user_id: str) -> dict[str, Any]:
        """Récupérer un enrollment appartenant à l’appelant.

        Args:
            uc_id: Identifiant brut de l’enrollment.
            user_id: Identité de l’appelant.

        Returns:
            dict: Document de l’enrollment.

        Raises:
            NotFoundError: Enrollment absent.
            ForbiddenError: Enrollment d’un autre utilisateur.
        """
        uc = await self.db[USER_CHALLENGES].find_one({"_id": as_doc_id(uc_id)})
        if not uc:
            raise NotFoundError("UserChallenge not found")
        if uc.get("user_id") != user_id:
            raise ForbiddenError("Forbidden: only the owner can modify this participation")
        return uc

    @staticmethod
    def validate_progress_values(progress: Any, add_log_value: Any) -> None:
        """Valider les valeurs d’une mise à jour de progression.

        Raises:
            InvalidInputError: Valeur présente mais non numérique ou non finie.
        """
        if progress is not None and not is_real_number(progress):
            raise InvalidInputError("progress must be a finite number between 0 and 100")
        if add_log_value is not None and not is_real_number(add_log_value):
            raise InvalidInputError("addLogValue must be a finite number")
