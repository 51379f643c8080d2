from langgraph.graph import StateGraph, START, END
from loguru import logger

from graph.state import RelayState
from graph.nodes.capture import capture
from graph.nodes.validate import validate
from graph.nodes.enrich import enrich
from graph.nodes.forward import forward
from graph.nodes.respond import respond

def continue_or_respond(state: RelayState) -> str:
    """Short-circuit to respond as soon as a step fails."""
    outcome = state.get("outcome")
    if outcome is not None and outcome.ok:
        return "continue"
    logger.info(f"Step failed with {getattr(outcome, 'status_code', 'no outcome')}, responding")
    return "respond"

def build_workflow():
    """Build the registration relay workflow."""
    workflow = StateGraph(RelayState)
    
    # Add nodes
    workflow.add_node("capture", capture)
    workflow.add_node("validate", validate)
    workflow.add_node("enrich", enrich)
    workflow.add_node("forward", forward)
    workflow.add_node("respond", respond)
    
    # Linear pipeline; every failing step jumps to respond
    workflow.add_edge(START, "capture")
    workflow.add_conditional_edges(
        "capture",
        continue_or_respond,
        {"continue": "validate", "respond": "respond"}
    )
    workflow.add_conditional_edges(
        "validate",
        continue_or_respond,
        {"continue": "enrich", "respond": "respond"}
    )
    workflow.add_edge("enrich", "forward")
    workflow.add_edge("forward", "respond")
    workflow.add_edge("respond", END)
    
    return workflow.compile()
