# backend/app/api/dto/response_format.py
# Enveloppes de réponse standard (succès / erreur) partagées par toutes les routes.

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Réponse de succès : `data` optionnelle et message lisible."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class CountResult(BaseModel):
    """Nombre de documents touchés par une écriture (modifiés ou supprimés)."""

    count: int = 0


class ErrorResponse(BaseModel):
    """Réponse d'erreur : `error` contient au minimum `code` et `message`."""

    success: bool = False
    error: dict[str, Any]

    @classmethod
    def from_detail(cls, detail: Union[str, dict[str, Any]], code: str = "VALIDATION_ERROR"):
        """Construit l'erreur depuis un message simple ou un dict déjà structuré."""
        if isinstance(detail, str):
            return cls(error={"code": code, "message": detail})
        return cls(error={"code": code, **detail})
