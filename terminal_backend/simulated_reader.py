"""
Valeurs par défaut du mode test Stripe Terminal (lecteur simulé).
- TEST_CARDS: numéros de cartes de test pour les paiements simulés.
- DEFAULT_READER: paramètres d'un lecteur de test.
- TEST_MODE: devise par défaut et délai de traitement simulé.
"""
from typing import Any, Dict

from terminal_backend.config import TERMINAL_LOCATION_ID

# Code d'enregistrement réservé par Stripe aux lecteurs simulés (WisePOS E)
SIMULATED_REGISTRATION_CODE = "simulated-wpe"
SIMULATED_READER_LABEL = "Simulated Reader"
SIMULATED_READER_LOCATION = TERMINAL_LOCATION_ID or "test_mode"

TEST_CARDS: Dict[str, str] = {
    "visa": "4242424242424242",
    "mastercard": "5555555555554444",
    "amex": "378282246310005",
    "discover": "6011111111111117",
}

DEFAULT_READER: Dict[str, Any] = {
    "registration_code": "simulated-code",
    "label": "Test Reader",
    "location": "london",
}

TEST_MODE: Dict[str, Any] = {
    "is_enabled": True,
    "simulate_payment_delay_ms": 2000,
    "default_currency": "usd",
}

DEFAULT_CURRENCY: str = TEST_MODE["default_currency"]


def simulated_reader_config() -> Dict[str, Any]:
    """Vue sérialisable de la configuration du mode test (exposée aux clients)."""
    return {
        "test_cards": dict(TEST_CARDS),
        "default_reader": dict(DEFAULT_READER),
        "test_mode": dict(TEST_MODE),
        "simulated_registration_code": SIMULATED_REGISTRATION_CODE,
        "simulated_location": SIMULATED_READER_LOCATION,
    }
