"""
Endpoint de suivi d'un PaymentIntent (polling depuis la caisse).
- Retour normalisé via payments.service.payment_intent_summary
- 404 si Stripe ne connaît pas l'identifiant (resource_missing)
"""
import logging
from fastapi import APIRouter, HTTPException

from terminal_backend.infra import stripe_client
from terminal_backend.payments.service import payment_intent_summary
from terminal_backend.utils.responses import success

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payment-status", tags=["Payments"])

@router.get("/{payment_intent_id}")
def get_payment_status(payment_intent_id: str):
    try:
        payment_intent = stripe_client.retrieve_payment_intent(payment_intent_id)
        if not payment_intent:
            raise HTTPException(status_code=404, detail="PaymentIntent introuvable")
        return success(payment_intent=payment_intent_summary(payment_intent))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur get_payment_status")
        raise stripe_client.to_http_exception(e)
