"""
Module 'payments' (feature-first): point d'entrée public.
Réunit la validation des paiements Terminal, les modèles de requête et le traitement des webhooks.
"""

from .service import (
    to_minor_units,
    build_payment_intent_params,
    create_payment_intent,
    process_payment,
    simulate_payment,
    create_and_process_payment,
    payment_intent_summary,
    webhook_handle_event,
)

__all__ = [
    "to_minor_units",
    "build_payment_intent_params",
    "create_payment_intent",
    "process_payment",
    "simulate_payment",
    "create_and_process_payment",
    "payment_intent_summary",
    "webhook_handle_event",
]
