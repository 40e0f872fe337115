# backend/app/core/exception_handlers.py
# Gestionnaires d'exceptions globaux : erreurs métier, HTTP, validation et erreurs inattendues.

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.dto.response_format import ErrorResponse
from app.core.exceptions import DomainError
from app.core.logging_config import get_loggers


def register_exception_handlers(app: FastAPI):
    """Enregistre les gestionnaires d'exceptions globaux pour standardiser les réponses."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Gestionnaire pour les erreurs métier levées par les services."""
        detail = {"code": exc.code, "message": exc.message}
        if exc.details:
            detail["details"] = exc.details
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse.from_detail(detail).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Gestionnaire pour les exceptions HTTP standards."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse.from_detail(
                {"code": f"HTTP_{exc.status_code}", "message": exc.detail}
            ).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Gestionnaire pour les erreurs de validation Pydantic."""
        errors = []
        for error in exc.errors():
            errors.append(
                {
                    "field": " -> ".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        return JSONResponse(
            status_code=422,
            content=ErrorResponse.from_detail(
                {"code": "VALIDATION_ERROR", "message": "Validation failed", "details": errors}
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Gestionnaire pour les exceptions non capturées."""
        _, error_logger, _ = get_loggers()
        error_logger.error(
            "Unhandled error on %s %s: %r", request.method, request.url.path, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse.from_detail(
                {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}
            ).model_dump(),
        )
