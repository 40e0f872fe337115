# backend/app/core/utils.py
# Fonctions temporelles basiques (UTC aware) et helpers numériques.

import datetime as dt
import math
from typing import Any


def utcnow():
    """Date/heure UTC (timezone-aware).

    Description:
        Retourne `datetime.now(timezone.utc)` avec timezone UTC attachée. Utilisé
        pour tous les horodatages persistés et les comparaisons.

    Returns:
        datetime.datetime: Timestamp UTC (aware).
    """
    return dt.datetime.now(dt.timezone.utc)


def is_real_number(value: Any) -> bool:
    """Vrai si `value` est un int/float fini (les booléens sont exclus).

    Description:
        Un int Python est toujours fini, quelle que soit sa taille : `math.isfinite`
        n’est appelé que sur les floats (il échoue sur un int trop grand pour un float).
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False
