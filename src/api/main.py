"""FastAPI application entry point."""

import asyncio
import time
import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.logging import RequestLog, get_client_ip, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import (
    auth_router,
    events_router,
    forum_router,
    gate_router,
    health_router,
    library_router,
    members_router,
)
from core import config
from core.config import API_DEBUG, API_VERSION, SITE_NAME


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: verify the database has been created
    if not config.DB_PATH.exists():
        warnings.warn(f"Database not found at {config.DB_PATH}; run scripts/init_db.py")

    yield


app = FastAPI(
    title=f"{SITE_NAME} API",
    description="REST API for the community site: members, documents, videos, events, forum and gate code",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_log_middleware(request: Request, call_next):
    """Record every request in the api_requests table."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
    )
    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise
    finally:
        request_log.member_id = getattr(request.state, "member_id", None)
        request_log.error_code = getattr(request.state, "error_code", request_log.error_code)
        request_log.error_message = getattr(request.state, "error_message", request_log.error_message)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            await asyncio.to_thread(log_request, request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass


@app.exception_handler(HTTPException)
async def api_exception_handler(request: Request, exc: HTTPException):
    """Note error details for the request log, then respond as usual."""
    if isinstance(exc.detail, dict):
        request.state.error_code = exc.detail.get("code")
        request.state.error_message = exc.detail.get("error")
    else:
        request.state.error_message = str(exc.detail)
    return await http_exception_handler(request, exc)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    request.state.error_code = ErrorCodes.INTERNAL_ERROR
    request.state.error_message = str(exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(members_router)
app.include_router(library_router)
app.include_router(events_router)
app.include_router(forum_router)
app.include_router(gate_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
