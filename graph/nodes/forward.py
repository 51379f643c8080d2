from langchain_core.runnables import RunnableConfig
from loguru import logger

from graph.state import RelayState
from tools.google_script import GoogleScriptClient

async def forward(state: RelayState, config: RunnableConfig) -> RelayState:
    """Send the enriched registration to the spreadsheet intake script."""
    upstream: GoogleScriptClient = config["configurable"]["upstream"]
    enriched = state["enriched"]
    
    logger.info(f"Forwarding registration for {enriched.email}")
    outcome = await upstream.submit(enriched.model_dump())
    
    if outcome.ok:
        state["upstream"] = outcome.value
    else:
        logger.error(f"Forwarding failed for {enriched.email}: {outcome.error}")
    
    state["outcome"] = outcome
    return state
