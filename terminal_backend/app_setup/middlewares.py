"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS (accès réseau local depuis la caisse / l’app mobile).
- register_security_middleware: en-têtes de sécurité (ressources cross-origin autorisées).
- register_request_logging_middleware: une ligne de log par requête (méthode, chemin, statut, durée).
Notes:
- L’ordre d’ajout est important: le dernier middleware ajouté s’exécute en premier.
"""
import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from terminal_backend.config import CORS_ORIGINS, HSTS_ENABLED

logger = logging.getLogger("terminal_backend.access")

def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute CORSMiddleware.
    - "*" autorise toute origine; allow_origin_regex est utilisé pour garder allow_credentials.
    """
    if "*" in CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)

        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cross-Origin-Resource-Policy", "cross-origin")
        if HSTS_ENABLED:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")
        return response

def register_request_logging_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
        return response
