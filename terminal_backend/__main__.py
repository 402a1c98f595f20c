"""
Point d'entrée principal du backend terminal.

Usage:
    python -m terminal_backend

Lance uvicorn sur toutes les interfaces (accès depuis le réseau local) et lit:
- HOST / PORT: adresse d'écoute (par défaut 0.0.0.0:3000)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
"""
import logging
import os
import uvicorn

from terminal_backend.config import HOST, PORT, LOG_LEVEL

def main():
    logging.basicConfig(level=LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    logging.getLogger("uvicorn.error").info("Serveur disponible sur http://%s:%s (docs: /api-docs)", HOST, PORT)
    uvicorn.run(
        "terminal_backend.asgi:app",
        host=HOST,
        port=PORT,
        reload=reload_flag,
        log_level=LOG_LEVEL,
    )

if __name__ == "__main__":
    main()
