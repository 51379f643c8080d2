from typing import TypedDict, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict

from graph.result import Result

class EnrichedPayload(BaseModel):
    """Normalized registration plus server-observed request metadata."""
    model_config = ConfigDict(frozen=True)

    nombre: str
    email: str
    whatsapp: str
    producto: str = "Lanzamiento"
    productoId: str = ""
    productoHandle: str = ""
    productoPrice: str = ""
    productoImage: str = ""
    ip: str = "Unknown"
    userAgent: str = "Unknown"
    origen: str = "Unknown"
    fecha: str

class RelayResult(BaseModel):
    """JSON body returned to the caller."""
    success: bool
    message: str
    timestamp: Optional[str] = None
    error: Optional[str] = None

    def body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

class RelayState(TypedDict, total=False):
    """State shape for the relay workflow."""
    raw_body: bytes                  # request body as received
    headers: Dict[str, str]          # lower-cased inbound header names
    payload: Dict[str, Any]          # parsed JSON, then validated/normalized fields
    enriched: EnrichedPayload
    upstream: Dict[str, Any]         # parsed upstream JSON response
    outcome: Result                  # result of the last step that ran
    result: RelayResult
    status_code: int
