"""
Gestionnaires d’exceptions: toutes les erreurs API sont rendues dans l’enveloppe
{"status": "error", "message": ...}.
- HTTPException: code et detail conservés.
- RequestValidationError: 400 avec le premier message de validation.
- Exception non gérée: 500 générique; le détail n’est exposé qu’en développement.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from terminal_backend.config import IS_DEVELOPMENT
from terminal_backend.utils.responses import error

logger = logging.getLogger(__name__)

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Requête invalide"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg") or "invalide"
    return f"{loc}: {msg}" if loc else msg

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_envelope(request: Request, exc: StarletteHTTPException):
        response = error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_envelope(request: Request, exc: RequestValidationError):
        return error(400, _validation_message(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_envelope(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error(500, "Something went wrong!", str(exc) if IS_DEVELOPMENT else None)
