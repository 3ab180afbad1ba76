"""
Notes API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by an ASGI server (e.g. `uvicorn notes_api.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────┐ ┌─────────────┐    │
    │  │ /api/notes ... │ │ GET /say │ │ GET /health │    │
    │  └────────────────┘ └──────────┘ └─────────────┘    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Pool→503     │   │
    │  │ Database→500   │ Upstream→500 │ other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the persistence gateway (unless one
              was injected)
    Shutdown: dispose the gateway (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import PersistenceGateway, create_gateway
from notes_api.exceptions import (
    DatabaseError,
    NotesAPIError,
    NotFoundError,
    ServiceUnavailableError,
    UpstreamServiceError,
    ValidationError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.routes import health, keyword, notes
from notes_api.validation import validation_error_from

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then the gateway. An injected gateway is left alone
    and not disposed here; its owner disposes it.
    """
    setup_logging()
    logger.info("Notes API %s starting up...", __version__)

    owns_gateway = getattr(app.state, "gateway", None) is None
    if owns_gateway:
        app.state.gateway = create_gateway(settings)

    yield

    logger.info("Notes API shutting down...")
    if owns_gateway:
        await app.state.gateway.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        RequestValidationError  → 400 (converted to ValidationError)
        ValidationError         → 400 Bad Request
        NotFoundError           → 404 Not Found
        ServiceUnavailableError → 503 Service Unavailable
        DatabaseError           → 500 Internal Server Error
        UpstreamServiceError    → 500 Internal Server Error
        NotesAPIError (base)    → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Security: responses NEVER carry stack traces, SQL or driver messages.
    Details are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Schema violations on path, query or body parameters."""
        return await handle_validation_error(request, validation_error_from(exc.errors()))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Validation error on %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.errors,
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, {"errors": exc.errors}),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        logger.warning("[%s] Service unavailable: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=503,
            content=_error_body(
                "service_unavailable",
                exc.message,
                {"retry_after": exc.retry_after},
            ),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client, context logged server-side."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(UpstreamServiceError)
    async def handle_upstream_error(request: Request, exc: UpstreamServiceError):
        logger.error(
            "[%s] Upstream error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(NotesAPIError)
    async def handle_app_error(request: Request, exc: NotesAPIError):
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all. Stack trace goes to the log only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(gateway: Optional[PersistenceGateway] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        gateway: Optional pre-built PersistenceGateway (tests inject one bound
                 to a throwaway database). Without it, the lifespan builds
                 one from settings at startup.
    """
    app = FastAPI(
        title="Notes API",
        description="CRUD operations for notes, plus a keyword relay endpoint.",
        version=__version__,
        lifespan=lifespan,
    )

    if gateway is not None:
        app.state.gateway = gateway

    # Middleware executes in REVERSE order of addition:
    # RequestID runs first so the access log can read the ID.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(keyword.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notes_api.main:app` to be importable
app = create_app()
