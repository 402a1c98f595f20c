from fastapi import APIRouter, Request

from terminal_backend.config import STRIPE_WEBHOOK_SECRET
from terminal_backend.infra import stripe_client
from terminal_backend.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"status": "ok"}

@router.get("/stripe")
def health_stripe(request: Request):
    # Aucun appel réseau: état de la configuration uniquement
    mode = stripe_client.key_mode()
    return {
        "configured": mode is not None,
        "mode": mode,
        "webhook_secret": bool(STRIPE_WEBHOOK_SECRET),
        "rate_limit": rate_limit_health_info(request),
    }
