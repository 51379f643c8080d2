import json
from typing import Any
from langchain_core.runnables import RunnableConfig
from loguru import logger

from graph.result import Ok, Result, client_error, internal_error
from graph.state import RelayState

INVALID_JSON = "JSON inválido en el body"
URL_NOT_CONFIGURED = "GOOGLE_SCRIPT_URL no configurada en las variables de entorno"

def parse_body(raw: bytes) -> Result:
    """Decode the request body as JSON; a non-object decodes to {}."""
    try:
        data: Any = json.loads(raw)
    except ValueError:
        return client_error(INVALID_JSON)
    return Ok(data if isinstance(data, dict) else {})

def capture(state: RelayState, config: RunnableConfig) -> RelayState:
    """Check the destination is configured, then parse the inbound body."""
    settings = config["configurable"]["settings"]
    
    if not settings.google_script_url:
        logger.error("GOOGLE_SCRIPT_URL is not set")
        state["outcome"] = internal_error(URL_NOT_CONFIGURED)
        return state
    
    outcome = parse_body(state.get("raw_body", b""))
    if outcome.ok:
        data = outcome.value
        logger.info(f"Registration received: {data.get('email', 'unknown')} / {data.get('producto', 'Lanzamiento')}")
        state["payload"] = data
    else:
        logger.warning("Rejected registration: body is not valid JSON")
    
    state["outcome"] = outcome
    return state
