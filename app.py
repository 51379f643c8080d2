import time
from typing import Optional
import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import RelaySettings, setup_logging
from graph.result import PROCESSING_FAILED
from graph.state import RelayResult
from graph.workflow import build_workflow
from tools.google_script import GoogleScriptClient

VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Accept",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Max-Age": "86400",
}

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

METHOD_NOT_ALLOWED = "Método no permitido. Use POST."

def relay_response(status_code: int, result: RelayResult) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.body(), headers=CORS_HEADERS)

def create_app(settings: Optional[RelaySettings] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Build the relay application.
    
    Args:
        settings: Explicit configuration; read from the environment when omitted
        transport: httpx transport for the upstream call (tests pass a MockTransport)
    """
    if settings is None:
        settings = RelaySettings()
    setup_logging(settings)
    
    app = FastAPI(
        title="Registration Relay",
        description="Forwards registration forms to a Google Apps Script intake",
        version=VERSION
    )
    app.state.settings = settings
    app.state.upstream = GoogleScriptClient(settings.google_script_url, transport=transport)
    app.state.graph = build_workflow()
    
    @app.get("/health")
    def health():
        """Health check endpoint."""
        return JSONResponse(
            content={
                "status": "healthy",
                "timestamp": time.time(),
                "version": VERSION,
                "services": {
                    "upstream": "configured" if app.state.upstream.configured else "missing",
                    "workflow": "ready"
                }
            },
            headers=CORS_HEADERS
        )
    
    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def submit_registration(req: Request, path: str):
        """
        Relay endpoint for registration forms.
        
        Expected payload:
        {
            "nombre": "Ana Gómez",
            "email": "ana@test.com",
            "whatsapp": "5551234",
            "producto": "Lanzamiento",
            "productoId": "", "productoHandle": "", "productoPrice": "", "productoImage": ""
        }
        """
        # Pre-flight is answered before the body is touched
        if req.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        
        if req.method != "POST":
            logger.warning(f"Rejected {req.method} /{path}")
            return relay_response(405, RelayResult(success=False, message=METHOD_NOT_ALLOWED))
        
        start_time = time.time()
        
        try:
            initial_state = {
                "raw_body": await req.body(),
                "headers": dict(req.headers),
            }
            result = await app.state.graph.ainvoke(
                initial_state,
                config={"configurable": {"settings": settings, "upstream": app.state.upstream}}
            )
        except Exception as e:
            logger.exception(f"Registration processing failed: {e}")
            return relay_response(500, RelayResult(success=False, message=PROCESSING_FAILED, error=str(e)))
        
        processing_time = time.time() - start_time
        logger.info(f"Registration handled in {processing_time:.2f}s with {result['status_code']}")
        
        return relay_response(result["status_code"], result["result"])
    
    # Error handlers
    @app.exception_handler(StarletteHTTPException)
    async def method_exception_handler(request: Request, exc: StarletteHTTPException):
        # Verbs outside ALL_METHODS are rejected by routing before reaching the relay
        if exc.status_code == 405:
            logger.warning(f"Rejected {request.method} {request.url.path}")
            return relay_response(405, RelayResult(success=False, message=METHOD_NOT_ALLOWED))
        return await http_exception_handler(request, exc)
    
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}")
        return relay_response(500, RelayResult(success=False, message=PROCESSING_FAILED, error=str(exc)))
    
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    
    logger.info("Starting Registration Relay")
    
    uvicorn.run(
        "app:app",
        host=app.state.settings.host,
        port=app.state.settings.port,
        log_level=app.state.settings.log_level.lower()
    )
