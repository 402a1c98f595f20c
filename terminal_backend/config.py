# terminal_backend.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du backend terminal.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets Stripe (clé secrète, secret webhook)
- Expose les réglages HTTP (CORS, HSTS, port) et l'environnement d'exécution
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# Stripe: clé secrète et secret de signature des webhooks
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")

# Location Stripe Terminal utilisée par défaut pour les lecteurs simulés
TERMINAL_LOCATION_ID = _clean_env(os.getenv("TERMINAL_LOCATION_ID") or "")

# Environnement: "development" expose le détail des erreurs 500
APP_ENV = _clean_env(os.getenv("APP_ENV") or "development").lower()
IS_DEVELOPMENT = APP_ENV == "development"

# CORS: toutes les origines par défaut (accès depuis le réseau local)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# HSTS uniquement derrière HTTPS
HSTS_ENABLED = (os.getenv("HSTS_ENABLED", "false").lower() == "true")

HOST = _clean_env(os.getenv("HOST") or "0.0.0.0")
PORT = int(os.getenv("PORT") or 3000)
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info").lower()
