"""
Cas d'usage 'payments': valide les entrées puis orchestre les appels stripe_client.
- Paiements carte présente (card_present) à capture manuelle, liés à un lecteur Terminal.
- Les erreurs de validation sont levées en HTTPException (400/404), les erreurs
  Stripe remontent telles quelles à la vue.
"""
from typing import Any, Dict, Optional
import math
import logging
from fastapi import HTTPException

from terminal_backend.infra import stripe_client

logger = logging.getLogger(__name__)

READER_ONLINE = "online"

def to_minor_units(amount: float) -> int:
    """Convertit un montant (ex: 12.5) en plus petite unité (1250)."""
    return int(round(amount * 100))

def validate_amount(amount: Optional[float]) -> float:
    # NaN / infini: non convertibles en centimes
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise HTTPException(status_code=400, detail="Montant valide requis")
    return amount

def get_reader(reader_id: Optional[str], *, require_online: bool) -> Dict[str, Any]:
    """
    Récupère le lecteur et vérifie son état.
    - 400 si l'identifiant est vide
    - 404 si Stripe ne renvoie rien
    - 400 si require_online et le lecteur n'est pas 'online'
    """
    reader_id = (reader_id or "").strip()
    if not reader_id:
        raise HTTPException(status_code=400, detail="Identifiant du lecteur requis")
    reader = stripe_client.retrieve_reader(reader_id)
    if not reader:
        raise HTTPException(status_code=404, detail="Lecteur introuvable")
    if require_online and reader.get("status") != READER_ONLINE:
        raise HTTPException(status_code=400, detail="Le lecteur n'est pas en ligne")
    return reader

def build_payment_intent_params(amount: float, currency: str, reader_id: str) -> Dict[str, Any]:
    return {
        "amount": to_minor_units(amount),
        "currency": (currency or "").lower(),
        "payment_method_types": ["card_present"],
        "capture_method": "manual",
        "metadata": {"readerId": reader_id},
    }

def create_payment_intent(*, amount: Optional[float], currency: str, reader_id: Optional[str], simulated: bool = False) -> Dict[str, Any]:
    """
    Crée un PaymentIntent pour un lecteur donné.
    - Les lecteurs simulés ne sont pas soumis au contrôle 'online'.
    Retour: dict PaymentIntent.
    """
    reader_id = (reader_id or "").strip()
    amount = validate_amount(amount)
    get_reader(reader_id, require_online=not simulated)
    params = build_payment_intent_params(amount, currency, reader_id)
    payment_intent = stripe_client.create_payment_intent(**params)
    logger.info("payments.create_payment_intent id=%s amount=%s reader=%s", payment_intent.get("id"), params["amount"], reader_id)
    return payment_intent

def process_payment(*, reader_id: str, payment_intent_id: Optional[str]) -> Dict[str, Any]:
    """Transmet un PaymentIntent existant à un lecteur en ligne."""
    reader_id = (reader_id or "").strip()
    payment_intent_id = (payment_intent_id or "").strip()
    if not payment_intent_id:
        raise HTTPException(status_code=400, detail="Identifiant du PaymentIntent requis")
    get_reader(reader_id, require_online=True)
    return stripe_client.process_payment_intent(reader_id, payment_intent_id)

def simulate_payment(*, reader_id: str) -> Dict[str, Any]:
    """Simule la présentation d'une carte (mode test uniquement)."""
    reader_id = (reader_id or "").strip()
    if stripe_client.is_live_mode():
        raise HTTPException(status_code=400, detail="Simulation disponible uniquement en mode test")
    get_reader(reader_id, require_online=False)
    return stripe_client.present_payment_method(reader_id)

def create_and_process_payment(*, reader_id: str, amount: Optional[float], currency: str, simulated: bool = False) -> Dict[str, Any]:
    """
    Crée le PaymentIntent puis le transmet immédiatement au lecteur.
    Retour: {"paymentIntent": ..., "reader": ...}
    """
    reader_id = (reader_id or "").strip()
    payment_intent = create_payment_intent(amount=amount, currency=currency, reader_id=reader_id, simulated=simulated)
    reader = stripe_client.process_payment_intent(reader_id, payment_intent["id"])
    return {"paymentIntent": payment_intent, "reader": reader}

def payment_intent_summary(payment_intent: Dict[str, Any]) -> Dict[str, Any]:
    """Vue réduite d'un PaymentIntent (statut, montant, méthode, erreur éventuelle)."""
    return {
        "id": payment_intent.get("id"),
        "status": payment_intent.get("status"),
        "amount": payment_intent.get("amount"),
        "currency": payment_intent.get("currency"),
        "payment_method": payment_intent.get("payment_method"),
        "created": payment_intent.get("created"),
        "metadata": payment_intent.get("metadata"),
        "last_payment_error": payment_intent.get("last_payment_error"),
    }

def webhook_handle_event(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Résume et journalise les événements PaymentIntent reçus par webhook.
    - payment_intent.succeeded -> status "success" (avec la méthode de paiement)
    - payment_intent.payment_failed -> status "failed" (avec l'erreur de paiement)
    - autres types: None (ignorés)
    """
    event_type = (event or {}).get("type")
    obj = ((event or {}).get("data") or {}).get("object") or {}
    payment_intent = payment_intent_summary(obj)
    if event_type == "payment_intent.succeeded":
        payment_intent.pop("last_payment_error")
        summary = {"received": True, "status": "success", "payment_intent": payment_intent}
        logger.info("payments.webhook %s", summary)
        return summary
    if event_type == "payment_intent.payment_failed":
        payment_intent.pop("payment_method")
        payment_intent["error"] = payment_intent.pop("last_payment_error")
        summary = {"received": True, "status": "failed", "payment_intent": payment_intent}
        logger.warning("payments.webhook %s", summary)
        return summary
    logger.debug("payments.webhook ignored type=%s", event_type)
    return None
