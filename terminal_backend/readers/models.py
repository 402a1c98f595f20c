from typing import Optional
from pydantic import BaseModel

class RegisterReaderRequest(BaseModel):
    registration_code: Optional[str] = None
    label: Optional[str] = None
    location: Optional[str] = None
    simulated: bool = False
