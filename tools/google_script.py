import json
import httpx
from typing import Dict, Any, Optional
from loguru import logger

from graph.result import Ok, Result, internal_error

INVALID_RESPONSE = "Respuesta inválida de Google Apps Script"
SAVE_FAILED = "Error al guardar en Google Sheets"

class GoogleScriptClient:
    """Spreadsheet intake (Google Apps Script web app) client."""
    
    def __init__(self, url: Optional[str], transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self._transport = transport
    
    @property
    def configured(self) -> bool:
        return bool(self.url)
    
    async def submit(self, payload: Dict[str, Any]) -> Result:
        """
        POST one registration to the intake script.
        
        Args:
            payload: Enriched registration, already JSON-ready
            
        Returns:
            Ok(parsed upstream JSON) when the script reports success,
            otherwise an internal Err carrying the failure detail
        """
        try:
            # Apps Script answers POSTs with a redirect to the result page
            async with httpx.AsyncClient(follow_redirects=True, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                    headers={"Content-Type": "application/json"},
                )
                text = response.text
        except httpx.HTTPError as e:
            logger.error(f"Google Apps Script request failed: {e!r}")
            return internal_error(str(e) or type(e).__name__)
        
        logger.info(f"Google Apps Script response ({response.status_code}): {text}")
        
        try:
            result = json.loads(text)
        except ValueError:
            logger.error("Google Apps Script returned a non-JSON body")
            return internal_error(INVALID_RESPONSE)
        
        if not isinstance(result, dict):
            result = {}
        
        if not response.is_success or not result.get("success"):
            message = result.get("message")
            return internal_error(str(message) if message else SAVE_FAILED)
        
        return Ok(result)
