# module terminal_backend.payments.views

"""Endpoints paiements carte présente (Stripe Terminal).
- /create-payment-intent: crée un PaymentIntent (capture manuelle) pour un lecteur.
- /capture-payment, /cancel-payment: capture ou annule un PaymentIntent.
- /process-payment: transmet un PaymentIntent existant au lecteur.
- /simulate-payment: présente une carte de test sur un lecteur simulé.
- /create-and-process-payment: création + transmission en un seul appel.
- /webhook: reçoit les événements Stripe signés.
Erreurs: enveloppe {"status": "error", "message": ...} via les exception handlers.
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from terminal_backend.infra import stripe_client
from terminal_backend.payments import service as payments_service
from terminal_backend.payments.models import (
    CreatePaymentIntentRequest,
    CreateAndProcessRequest,
    ProcessPaymentRequest,
)
from terminal_backend.utils.rate_limit import optional_rate_limit
from terminal_backend.utils.responses import success

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["Payments"])

_rate_limited = [Depends(optional_rate_limit(times=10, seconds=60))]


@router.post("/create-payment-intent", dependencies=_rate_limited)
def create_payment_intent(body: CreatePaymentIntentRequest):
    """
    Crée un PaymentIntent pour un lecteur spécifique.
    - Entrée JSON: {"amount": 12.5, "currency": "usd", "readerId": "tmr_...", "simulated": false}
    - amount est exprimé en unités de devise puis converti en centimes
    - Erreurs: 400 montant/lecteur invalide ou lecteur hors ligne, 404 lecteur introuvable
    """
    try:
        payment_intent = payments_service.create_payment_intent(
            amount=body.amount,
            currency=body.currency,
            reader_id=body.reader_id,
            simulated=body.simulated,
        )
        return success(paymentIntent=payment_intent)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur create_payment_intent")
        raise stripe_client.to_http_exception(e)


@router.post("/capture-payment/{payment_intent_id}", dependencies=_rate_limited)
def capture_payment(payment_intent_id: str):
    """Capture un PaymentIntent autorisé (capture_method=manual)."""
    try:
        payment_intent = stripe_client.capture_payment_intent(payment_intent_id)
        logger.info("payments.capture id=%s status=%s", payment_intent.get("id"), payment_intent.get("status"))
        return success(paymentIntent=payment_intent)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur capture_payment")
        raise stripe_client.to_http_exception(e)


@router.post("/cancel-payment/{payment_intent_id}", dependencies=_rate_limited)
def cancel_payment(payment_intent_id: str):
    """Annule un PaymentIntent non capturé."""
    try:
        payment_intent = stripe_client.cancel_payment_intent(payment_intent_id)
        logger.info("payments.cancel id=%s status=%s", payment_intent.get("id"), payment_intent.get("status"))
        return success(paymentIntent=payment_intent)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur cancel_payment")
        raise stripe_client.to_http_exception(e)


@router.post("/webhook", include_in_schema=False)
async def webhook_stripe(request: Request):
    """
    Webhook Stripe: vérifie la signature puis résume les événements PaymentIntent.
    - Signature: stripe_client.parse_event (Stripe-Signature + STRIPE_WEBHOOK_SECRET)
    - Réponse: {"received": true}
    - Erreurs: 400 texte brut "Webhook Error: <message>"
    """
    try:
        event = await stripe_client.parse_event(request)
    except Exception as e:
        logger.warning("payments.webhook rejected: %s", e)
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)
    payments_service.webhook_handle_event(event)
    return JSONResponse({"received": True})


@router.post("/process-payment/{reader_id}", dependencies=_rate_limited)
def process_payment(reader_id: str, body: Optional[ProcessPaymentRequest] = None):
    """
    Transmet un PaymentIntent au lecteur pour la collecte de la carte.
    - Entrée JSON: {"payment_intent": "pi_..."}
    - Erreurs: 400 payment_intent manquant ou lecteur hors ligne, 404 lecteur introuvable
    """
    try:
        reader = payments_service.process_payment(
            reader_id=reader_id,
            payment_intent_id=body.payment_intent if body else None,
        )
        return success(reader=reader)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur process_payment")
        raise stripe_client.to_http_exception(e)


@router.post("/simulate-payment/{reader_id}", dependencies=_rate_limited)
def simulate_payment(reader_id: str):
    """
    Simule la présentation d'une carte sur un lecteur (mode test uniquement).
    - Erreurs: 400 si clé live, 404 lecteur introuvable
    """
    try:
        reader = payments_service.simulate_payment(reader_id=reader_id)
        return success(reader=reader)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur simulate_payment")
        raise stripe_client.to_http_exception(e)


@router.post("/create-and-process-payment/{reader_id}", dependencies=_rate_limited)
def create_and_process_payment(reader_id: str, body: CreateAndProcessRequest):
    """
    Crée un PaymentIntent et le transmet au lecteur en un seul appel.
    - Entrée JSON: {"amount": 12.5, "currency": "usd", "simulated": false}
    - Retour: {"status": "success", "paymentIntent": ..., "reader": ...}
    """
    try:
        result = payments_service.create_and_process_payment(
            reader_id=reader_id,
            amount=body.amount,
            currency=body.currency,
            simulated=body.simulated,
        )
        return success(**result)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur create_and_process_payment")
        raise stripe_client.to_http_exception(e)
