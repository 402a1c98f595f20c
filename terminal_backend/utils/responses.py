"""
Enveloppe JSON commune des réponses API.
- Succès: {"status": "success", ...payload}
- Erreur: {"status": "error", "message": "..."}
"""
from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse

def success(status_code: int = 200, **payload: Any) -> JSONResponse:
    body: Dict[str, Any] = {"status": "success"}
    body.update(payload)
    return JSONResponse(status_code=status_code, content=body)

def error(status_code: int, message: str, error_detail: Optional[str] = None) -> JSONResponse:
    body: Dict[str, Any] = {"status": "error", "message": message}
    if error_detail is not None:
        body["error"] = error_detail
    return JSONResponse(status_code=status_code, content=body)
