# module terminal_backend.payments.models
"""Corps de requête des endpoints paiements.
Les champs sont optionnels au niveau du schéma: la validation métier (montant > 0,
lecteur requis, ...) est faite par le service pour renvoyer des 400 explicites.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from terminal_backend.simulated_reader import DEFAULT_CURRENCY

class CreatePaymentIntentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[float] = Field(default=None, description="Montant en unités de la devise (ex: 12.5)")
    currency: str = Field(default=DEFAULT_CURRENCY, description="Code devise ISO")
    reader_id: Optional[str] = Field(default=None, alias="readerId", description="Identifiant du lecteur Terminal")
    simulated: bool = False

class CreateAndProcessRequest(BaseModel):
    amount: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    simulated: bool = False

class ProcessPaymentRequest(BaseModel):
    payment_intent: Optional[str] = Field(default=None, description="Identifiant du PaymentIntent à traiter")
