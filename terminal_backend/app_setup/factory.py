"""
Factory d’application recommandée pour les entrypoints (ex: terminal_backend.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import (
    register_basic_middlewares,
    register_security_middleware,
    register_request_logging_middleware,
)
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      1) CORS
      2) en-têtes de sécurité
      3) log des requêtes (ajouté en dernier pour mesurer toute la pile)
      4) gestionnaires d’exceptions (enveloppe d’erreur)
      5) tous les routers (payments, payment-status, readers, health)
    La documentation interactive est servie sur /api-docs.
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(
        title="Stripe Terminal API",
        description="API pour les paiements carte présente via Stripe Terminal",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url=None,
    )
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_request_logging_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
