# backend/app/models/_shared.py
# Types communs utilisés par plusieurs modèles (dates UTC).

from __future__ import annotations

import datetime as dt
from typing import Annotated

from pydantic import AfterValidator


def _ensure_utc(value: dt.datetime) -> dt.datetime:
    """Une date sans fuseau est interprétée en UTC; les autres sont converties en UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


UTCDateTime = Annotated[dt.datetime, AfterValidator(_ensure_utc)]
