"""
Exceptions métier et gestion globale des erreurs HTTP.

Hiérarchie :
    DentalTrackError
    ├── NotFoundError           → 404
    ├── DomainValidationError   → 400
    ├── InvalidOperationError   → 400
    ├── ConflictError           → 409
    ├── UnauthorizedError       → 401
    └── ForbiddenError          → 403

Les services lèvent ces exceptions (ou leurs sous-classes par module),
les routes les laissent remonter et `register_exception_handlers()`
les convertit en réponse JSON homogène :

    {
        "status_code": 404,
        "message": "Patient 8f1c... non trouvé",
        "details": null,
        "timestamp": "2025-01-01T10:00:00+00:00"
    }
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class DentalTrackError(Exception):
    """Erreur métier de base."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[List[str]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(DentalTrackError):
    """Ressource introuvable."""
    status_code = status.HTTP_404_NOT_FOUND


class DomainValidationError(DentalTrackError):
    """Données invalides au regard des règles métier."""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidOperationError(DentalTrackError):
    """Opération interdite dans l'état courant (transition de statut...)."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DentalTrackError):
    """Conflit avec une donnée existante (email déjà utilisé...)."""
    status_code = status.HTTP_409_CONFLICT


class UnauthorizedError(DentalTrackError):
    """Authentification requise ou invalide."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(DentalTrackError):
    """Permission insuffisante."""
    status_code = status.HTTP_403_FORBIDDEN


# =============================================================================
# FORMAT DE RÉPONSE
# =============================================================================

def error_body(status_code: int, message: str, details: Any = None) -> dict:
    """Construit le corps JSON d'une réponse d'erreur."""
    return {
        "status_code": status_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _format_validation_error(error: dict) -> str:
    """Transforme une erreur Pydantic en message lisible : 'body.email: ...'."""
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Valeur invalide")
    return f"{location}: {message}" if location else message


# =============================================================================
# HANDLERS
# =============================================================================

async def dentaltrack_error_handler(request: Request, exc: DentalTrackError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s → %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s → %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [_format_validation_error(error) for error in exc.errors()]
    logger.info("%s %s → validation échouée : %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, "Validation échouée", details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Erreur HTTP"
    details = None if isinstance(exc.detail, str) else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message, details),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erreur non gérée sur %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Une erreur interne est survenue",
            str(exc),
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Installe le mapping global exception → statut HTTP.

    Usage dans main.py:
        app = FastAPI(...)
        register_exception_handlers(app)
    """
    app.add_exception_handler(DentalTrackError, dentaltrack_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
