"""
Registre central des routers.
- API: payments, payment_status, readers
- Health: health_router
"""
from fastapi import FastAPI
from terminal_backend.payments import views as payments_views
from terminal_backend.payment_status import views as payment_status_views
from terminal_backend.readers import views as readers_views
from terminal_backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l’application.
    - L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes).
    """
    app.include_router(payments_views.router)
    app.include_router(payment_status_views.router)
    app.include_router(readers_views.router)
    app.include_router(health_router)
