# backend/app/services/participation/progress_rules.py
# Règles de progression d’un enrollment : bornage 0–100, statut dérivé, documents de mise à jour.

from __future__ import annotations

import datetime as dt
from typing import Any

from app.core.bson_utils import dump_mongo
from app.core.exceptions import InvalidInputError
from app.models.user_challenge import STATUS_FINISHED, STATUS_ONGOING, UserChallenge

PROGRESS_MIN = 0
PROGRESS_MAX = 100


class ProgressRules:
    """Logique pure (sans base) des enrollments.

    Description:
        Centralise les invariants : `progress` borné à [0, 100] et stocké en entier,
        `status == Finished` si et seulement si `progress >= 100`, journal en ajout seul.
    """

    @staticmethod
    def clamp_progress(value: float) -> int:
        """Borne la valeur à [0, 100] puis la tronque en entier.

        Args:
            value: Pourcentage fourni par l’utilisateur.

        Returns:
            int: Pourcentage stockable.
        """
        return int(min(PROGRESS_MAX, max(PROGRESS_MIN, value)))

    @staticmethod
    def status_for(progress: int) -> str:
        return STATUS_FINISHED if progress >= PROGRESS_MAX else STATUS_ONGOING

    @staticmethod
    def new_enrollment(user_id: str, challenge_id: Any, now: dt.datetime) -> dict[str, Any]:
        """Document d’un nouvel enrollment (Ongoing, 0 %, journal vide).

        Args:
            user_id: Identité de l’appelant.
            challenge_id: `_id` du challenge tel que stocké.
            now: Horodatage commun à `join_date` et `last_updated`.

        Returns:
            dict: Document prêt à insérer.
        """
        uc = UserChallenge(
            user_id=user_id,
            challenge_id=challenge_id,
            join_date=now,
            last_updated=now,
        )
        return dump_mongo(uc)

    def build_progress_update(
        self,
        progress: float | None,
        add_log_value: float | None,
        now: dt.datetime,
    ) -> dict[str, Any]:
        """Construire la mise à jour MongoDB d’une progression.

        Description:
            - `progress` fourni : borné, puis `status` recalculé depuis cette seule valeur.
            - `add_log_value` fourni : `$push` d’une entrée `{date, value}` en fin de journal,
              sans toucher au pourcentage.
            - `last_updated` est toujours rafraîchi.

        Args:
            progress: Nouveau pourcentage ou None.
            add_log_value: Contribution à journaliser ou None.
            now: Horodatage de l’opération.

        Returns:
            dict: Document de mise à jour (`$set` et éventuellement `$push`).
        """
        set_data: dict[str, Any] = {"last_updated": now}
        if progress is not None:
            clamped = self.clamp_progress(progress)
            set_data["progress"] = clamped
            set_data["status"] = self.status_for(clamped)

        update: dict[str, Any] = {"$set": set_data}
        if add_log_value is not None:
            try:
                value = float(add_log_value)
            except OverflowError:
                raise InvalidInputError("addLogValue is too large") from None
            update["$push"] = {"progress_logs": {"date": now, "value": value}}
        return update
