# backend/app/core/security.py
# Identité de l'appelant (en-tête fourni par la couche d'authentification amont) et garde admin.

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.settings import get_settings
from app.db.mongodb import USERS, get_db


def get_current_user_email(request: Request) -> str:
    """Dépendance FastAPI : identité opaque de l'appelant.

    Description:
        Lit l'en-tête configuré (`identity_header`, `X-User-Email` par défaut). La façon
        dont l'amont a authentifié l'appelant n'est pas du ressort de l'API.

    Args:
        request (Request): Requête courante.

    Returns:
        str: Identité de l'appelant (email).

    Raises:
        HTTPException: 401 si l'en-tête est absent ou vide.
    """
    header = get_settings().identity_header
    user_email = (request.headers.get(header) or "").strip()
    if not user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unauthorized. Send {header} header.",
        )
    return user_email


CurrentUserEmail = Annotated[str, Depends(get_current_user_email)]


async def require_admin(
    user_email: CurrentUserEmail,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
) -> str:
    """Vérifie que l'appelant a le rôle admin dans `users`, sinon 403."""
    user = await db[USERS].find_one({"email": user_email}, {"role": 1})
    if not user or user.get("role") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return user_email
