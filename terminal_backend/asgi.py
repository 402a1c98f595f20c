"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn avec workers uvicorn) importe `terminal_backend.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, exceptions) est centralisée
  dans terminal_backend.app_setup.factory, ce fichier ne fait qu’exposer l’instance `app`.
"""

from terminal_backend.app import app

__all__ = ["app"]
