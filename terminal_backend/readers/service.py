"""
Couche service des lecteurs Terminal.
Rôles:
- Construire les paramètres d'enregistrement (lecteur physique ou simulé).
- Filtrer les critères de listing avant de les transmettre à Stripe.
"""
from typing import Any, Dict, List, Optional
import logging
from fastapi import HTTPException

from terminal_backend.infra import stripe_client
from terminal_backend.simulated_reader import (
    SIMULATED_REGISTRATION_CODE,
    SIMULATED_READER_LABEL,
    SIMULATED_READER_LOCATION,
)

logger = logging.getLogger(__name__)

def build_registration_params(
    *,
    registration_code: Optional[str],
    label: Optional[str],
    location: Optional[str],
    simulated: bool = False,
) -> Dict[str, Any]:
    """
    Paramètres Stripe pour Reader.create.
    - simulated: code forcé à "simulated-wpe", label et location par défaut
    - physique: registration_code obligatoire (400 sinon)
    - les champs vides ne sont pas transmis
    """
    reg_code = SIMULATED_REGISTRATION_CODE if simulated else (registration_code or "").strip()
    if not reg_code:
        raise HTTPException(status_code=400, detail="Code d'enregistrement requis pour un lecteur physique")

    params: Dict[str, Any] = {"registration_code": reg_code}
    label = label or (SIMULATED_READER_LABEL if simulated else None)
    location = location or (SIMULATED_READER_LOCATION if simulated else None)
    if label:
        params["label"] = label
    if location:
        params["location"] = location
    return params

def register_reader(**kwargs) -> Dict[str, Any]:
    params = build_registration_params(**kwargs)
    reader = stripe_client.create_reader(**params)
    logger.info("readers.register id=%s label=%s simulated=%s", reader.get("id"), params.get("label"), kwargs.get("simulated"))
    return reader

def list_readers(
    *,
    limit: Optional[int] = None,
    status: Optional[str] = None,
    location: Optional[str] = None,
    device_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    filters = {"limit": limit, "status": status, "location": location, "device_type": device_type}
    return stripe_client.list_readers(**{k: v for k, v in filters.items() if v is not None})

def get_reader(reader_id: str) -> Dict[str, Any]:
    reader = stripe_client.retrieve_reader(reader_id)
    if not reader:
        raise HTTPException(status_code=404, detail="Lecteur introuvable")
    return reader
