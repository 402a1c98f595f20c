"""
Adaptateur Stripe: centralise les appels et la configuration Stripe (Terminal + PaymentIntents).
- Chaque fonction configure la clé (require_stripe) puis appelle une seule méthode du SDK.
- Les objets Stripe sont convertis en dict (to_dict) avant de quitter ce module.
- to_http_exception traduit les erreurs du SDK en HTTPException pour les vues.
"""
import stripe
from typing import Any, Dict, List, Optional
from fastapi import HTTPException, Request

from terminal_backend.config import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET

# module terminal_backend.infra.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - Soulève HTTPException(500) si la clé est absente (aucun appel possible).
    """
    if not STRIPE_SECRET_KEY:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY manquant")
    stripe.api_key = STRIPE_SECRET_KEY
    return stripe

def _to_dict(obj) -> Dict[str, Any]:
    """
    StripeObject -> dict JSON-sérialisable.
    - Depuis stripe 15, StripeObject n'hérite plus de dict: dict(obj) et obj.get() échouent.
    - to_dict() est récursif (objets imbriqués: action, metadata, last_payment_error).
    """
    return obj.to_dict()

def is_live_mode() -> bool:
    """True si la clé configurée est une clé live (sk_live_/rk_live_)."""
    return STRIPE_SECRET_KEY.startswith(("sk_live_", "rk_live_"))

def key_mode() -> Optional[str]:
    if not STRIPE_SECRET_KEY:
        return None
    return "live" if is_live_mode() else "test"

# --- Lecteurs (Terminal) ---

def retrieve_reader(reader_id: str) -> Dict[str, Any]:
    require_stripe()
    return _to_dict(stripe.terminal.Reader.retrieve(reader_id))

def list_readers(**params: Any) -> List[Dict[str, Any]]:
    """
    Liste les lecteurs enregistrés.
    - params: filtres Stripe optionnels (limit, status, location, device_type)
    Retour: la liste `data` de la réponse Stripe.
    """
    require_stripe()
    readers = stripe.terminal.Reader.list(**params)
    return [_to_dict(r) for r in (readers.data or [])]

def create_reader(**params: Any) -> Dict[str, Any]:
    """
    Enregistre un lecteur (registration_code, label, location).
    Les paramètres à None doivent être filtrés par l'appelant.
    """
    require_stripe()
    return _to_dict(stripe.terminal.Reader.create(**params))

def process_payment_intent(reader_id: str, payment_intent_id: str) -> Dict[str, Any]:
    """Transmet un PaymentIntent au lecteur pour collecte de la carte."""
    require_stripe()
    return _to_dict(stripe.terminal.Reader.process_payment_intent(reader_id, payment_intent=payment_intent_id))

def present_payment_method(reader_id: str) -> Dict[str, Any]:
    """Helper de test Stripe: simule la présentation d'une carte sur un lecteur simulé."""
    require_stripe()
    return _to_dict(stripe.terminal.Reader.TestHelpers.present_payment_method(reader_id))

# --- PaymentIntents ---

def create_payment_intent(**params: Any) -> Dict[str, Any]:
    """
    Crée un PaymentIntent.
    - params: amount (centimes), currency, payment_method_types, capture_method, metadata
    Retour: dict PaymentIntent (ex: {"id": "pi_...", "status": "requires_payment_method", ...})
    """
    require_stripe()
    return _to_dict(stripe.PaymentIntent.create(**params))

def capture_payment_intent(payment_intent_id: str) -> Dict[str, Any]:
    require_stripe()
    return _to_dict(stripe.PaymentIntent.capture(payment_intent_id))

def cancel_payment_intent(payment_intent_id: str) -> Dict[str, Any]:
    require_stripe()
    return _to_dict(stripe.PaymentIntent.cancel(payment_intent_id))

def retrieve_payment_intent(payment_intent_id: str) -> Dict[str, Any]:
    require_stripe()
    return _to_dict(stripe.PaymentIntent.retrieve(payment_intent_id))

# --- Webhooks ---

async def parse_event(request: Request):
    """
    Parse et valide un événement Stripe signé (webhook).
    - Lit le body brut + en-tête Stripe-Signature
    - Valide la signature via Webhook.construct_event (STRIPE_WEBHOOK_SECRET)
    - Soulève ValueError / SignatureVerificationError si la vérification est impossible
    Retour: l’événement (dict) si la signature est valide.
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    if not STRIPE_WEBHOOK_SECRET:
        raise ValueError("STRIPE_WEBHOOK_SECRET manquant")
    if not sig_header:
        raise ValueError("En-tête Stripe-Signature manquant")
    return _to_dict(stripe.Webhook.construct_event(payload, sig_header, STRIPE_WEBHOOK_SECRET))

# --- Erreurs ---

def error_message(exc: Exception) -> str:
    """Message lisible d'une erreur Stripe (user_message si fourni par l'API)."""
    return getattr(exc, "user_message", None) or str(exc)

def http_status_for(exc: Exception) -> int:
    """
    Code HTTP à renvoyer pour une erreur du SDK.
    - resource_missing -> 404 (lecteur / PaymentIntent introuvable)
    - autres erreurs client 4xx (hors 401/403, qui relèvent de notre clé) -> même code
    - sinon 500
    """
    if isinstance(exc, stripe.InvalidRequestError) and getattr(exc, "code", None) == "resource_missing":
        return 404
    status = getattr(exc, "http_status", None)
    if isinstance(status, int) and 400 <= status < 500 and status not in (401, 403):
        return status
    return 500

def to_http_exception(exc: Exception) -> HTTPException:
    """Convertit une exception quelconque en HTTPException (StripeError mappée, sinon 500)."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, stripe.StripeError):
        return HTTPException(status_code=http_status_for(exc), detail=error_message(exc))
    return HTTPException(status_code=500, detail=str(exc))
