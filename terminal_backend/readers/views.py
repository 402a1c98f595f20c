"""Endpoints API pour les lecteurs Stripe Terminal.
- Listing avec filtres optionnels (limit, status, location, device_type).
- Enregistrement d'un lecteur physique (registration_code) ou simulé.
- Lecture d'un lecteur (statut online/offline, action en cours).
"""
from typing import Optional
import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from terminal_backend.infra import stripe_client
from terminal_backend.readers import service as readers_service
from terminal_backend.readers.models import RegisterReaderRequest
from terminal_backend.simulated_reader import simulated_reader_config
from terminal_backend.utils.rate_limit import optional_rate_limit
from terminal_backend.utils.responses import success

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/readers", tags=["Readers"])

@router.get("")
def list_readers(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    status: Optional[str] = None,
    location: Optional[str] = None,
    device_type: Optional[str] = None,
):
    """Liste les lecteurs enregistrés sur le compte Stripe."""
    try:
        readers = readers_service.list_readers(limit=limit, status=status, location=location, device_type=device_type)
        return success(readers=readers)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur list_readers")
        raise stripe_client.to_http_exception(e)

@router.post("/register", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def register_reader(body: RegisterReaderRequest):
    """
    Enregistre un lecteur.
    - Entrée JSON: {"registration_code": "...", "label": "...", "location": "tml_...", "simulated": false}
    - simulated=true: code "simulated-wpe", label/location par défaut
    - Retour: 201 {"status": "success", "reader": ...}
    """
    try:
        reader = readers_service.register_reader(
            registration_code=body.registration_code,
            label=body.label,
            location=body.location,
            simulated=body.simulated,
        )
        return success(status_code=201, reader=reader)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur register_reader")
        raise stripe_client.to_http_exception(e)

@router.get("/simulated/config")
def get_simulated_config():
    """Valeurs du mode test (cartes, lecteur par défaut, devise)."""
    return success(config=simulated_reader_config())

@router.get("/{reader_id}")
def get_reader(reader_id: str):
    """Récupère un lecteur (404 si inconnu de Stripe)."""
    try:
        reader = readers_service.get_reader(reader_id)
        return success(reader=reader)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur get_reader")
        raise stripe_client.to_http_exception(e)
