from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Sequence
from loguru import logger

from graph.result import Ok
from graph.state import EnrichedPayload, RelayState

UNKNOWN = "Unknown"

# Header names tried in order for each metadata field; first non-empty wins
IP_HEADERS = ("x-forwarded-for", "client-ip")
USER_AGENT_HEADERS = ("user-agent",)
ORIGIN_HEADERS = ("origin", "referer")

def utc_timestamp() -> str:
    """Current instant as ISO-8601 UTC with milliseconds, e.g. 2026-01-01T00:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def first_header(headers: Mapping[str, str], names: Sequence[str]) -> str:
    lowered = {key.lower(): value for key, value in headers.items()}
    for name in names:
        value = lowered.get(name)
        if value:
            return value
    return UNKNOWN

def build_enriched(payload: Dict[str, Any], headers: Mapping[str, str], fecha: str) -> EnrichedPayload:
    """Attach request metadata to an already validated payload."""
    return EnrichedPayload(
        **payload,
        ip=first_header(headers, IP_HEADERS),
        userAgent=first_header(headers, USER_AGENT_HEADERS),
        origen=first_header(headers, ORIGIN_HEADERS),
        fecha=fecha,
    )

def enrich(state: RelayState) -> RelayState:
    """Enrich the registration with client IP, user agent, origin and timestamp."""
    enriched = build_enriched(state["payload"], state.get("headers", {}), utc_timestamp())
    
    state["enriched"] = enriched
    state["outcome"] = Ok(enriched)
    logger.info(f"Enriched registration for {enriched.email} from {enriched.ip}")
    return state
