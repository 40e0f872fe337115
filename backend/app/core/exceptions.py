# backend/app/core/exceptions.py
# Exceptions métier levées par les services et converties en réponses HTTP standardisées.

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Erreur métier de base.

    Description:
        Porte un code applicatif et le statut HTTP associé. Les services lèvent ces
        erreurs, le gestionnaire global (`register_exception_handlers`) les convertit
        en `ErrorResponse`.

    Attributes:
        code (str): Code applicatif (ex. `NOT_FOUND`).
        status_code (int): Statut HTTP.
        message (str): Message lisible.
        details (dict | None): Détails optionnels.
    """

    code: str = "DOMAIN_ERROR"
    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DomainError):
    """Ressource référencée absente (challenge, enrollment, tip...)."""

    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(DomainError):
    """L'appelant n'est pas propriétaire de la ressource."""

    code = "FORBIDDEN"
    status_code = 403


class InvalidInputError(DomainError):
    code = "INVALID_INPUT"
    status_code = 400


class ConflictError(DomainError):
    code = "CONFLICT"
    status_code = 409
