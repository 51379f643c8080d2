from loguru import logger

from graph.state import RelayResult, RelayState
from graph.result import internal_error

SAVED = "Registro guardado exitosamente"

def respond(state: RelayState) -> RelayState:
    """Map the last step outcome to the caller-facing result."""
    outcome = state.get("outcome") or internal_error("Pipeline produced no outcome")
    
    if outcome.ok:
        state["status_code"] = 200
        state["result"] = RelayResult(
            success=True,
            message=SAVED,
            timestamp=state["enriched"].fecha,
        )
        upstream = state.get("upstream", {})
        logger.info(f"Registration relayed: {state['enriched'].email} (upstream message: {upstream.get('message', 'none')})")
    else:
        state["status_code"] = outcome.status_code
        state["result"] = RelayResult(
            success=False,
            message=outcome.message,
            error=outcome.error,
        )
    
    return state
