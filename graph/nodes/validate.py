import re
from typing import Any, Dict
from loguru import logger

from graph.result import Ok, Result, client_error
from graph.state import RelayState

REQUIRED_FIELDS = ["nombre", "email", "whatsapp"]

# Optional product fields and the value each takes when absent
OPTIONAL_DEFAULTS = {
    "producto": "Lanzamiento",
    "productoId": "",
    "productoHandle": "",
    "productoPrice": "",
    "productoImage": "",
}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_FIELDS = "Faltan campos requeridos: nombre, email y whatsapp son obligatorios"
INVALID_EMAIL = "Formato de email inválido"

def _text(value: Any) -> str:
    # JSON falsy values (null, "", 0, false) count as absent
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)

def validate_payload(data: Dict[str, Any]) -> Result:
    """
    Check required fields and email format, returning the normalized fields.
    
    Missing fields are reported before a bad email; the first failure wins.
    """
    normalized = {field: _text(data.get(field)).strip() for field in REQUIRED_FIELDS}
    
    if not all(normalized.values()):
        return client_error(MISSING_FIELDS)
    
    normalized["email"] = normalized["email"].lower()
    if not EMAIL_PATTERN.match(normalized["email"]):
        return client_error(INVALID_EMAIL)
    
    for field, default in OPTIONAL_DEFAULTS.items():
        normalized[field] = _text(data.get(field)) or default
    
    return Ok(normalized)

def validate(state: RelayState) -> RelayState:
    outcome = validate_payload(state.get("payload", {}))
    
    if outcome.ok:
        state["payload"] = outcome.value
        logger.info(f"Validation passed for {outcome.value['email']}")
    else:
        logger.warning(f"Rejected registration: {outcome.message}")
    
    state["outcome"] = outcome
    return state
