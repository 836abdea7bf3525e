"""
Bookmarks API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn bookmark_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌────────────┐ ┌──────┐ ┌──────┐      │
    │  │ Req ID   │→│ Access log │→│ GZip │→│ CORS │      │
    │  └──────────┘ └────────────┘ └──────┘ └──────┘      │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ {prefix} (bearer token gate) │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Unauth→401 │ 404 │ DB→500     │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Error body formats:
    MissingField / InvalidRating / InvalidUrl → text/plain message
    EmptyUpdate / NotFound / Unauthorized     → {"error": {"message": ...}}
    DatabaseError / unexpected                → {"error": {"message": generic,
                                                 "request_id": ...}}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from bookmark_api import __version__
from bookmark_api.config import settings
from bookmark_api.database import dispose_engine
from bookmark_api.exceptions import (
    DatabaseError,
    EmptyUpdateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from bookmark_api.middleware.logging import RequestLoggingMiddleware
from bookmark_api.middleware.request_id import RequestIDMiddleware, request_id_var
from bookmark_api.routes import bookmarks, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check. Shutdown: close pooled connections.
    """
    setup_logging()
    logger.info("Bookmarks API starting up (version %s)", __version__)

    # A missing API_TOKEN is logged, not fatal: /health keeps answering and
    # bookmark routes answer 401 until the token is configured
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Bookmarks collection mounted at %s", settings.bookmarks_prefix)

    yield

    logger.info("Bookmarks API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_envelope(message: str, **extra) -> dict:
    return {"error": {"message": message, **extra}}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response formats.

    Starlette picks the handler registered for the closest class in the
    exception's MRO, so EmptyUpdateError gets its JSON handler while its
    ValidationError siblings fall through to the plain-text one.

    Security: handlers never put stack traces, SQL or file paths in a
    response. Details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent a bad value; tell them which rule it broke."""
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(EmptyUpdateError)
    async def handle_empty_update(request: Request, exc: EmptyUpdateError):
        return JSONResponse(status_code=400, content=_error_envelope(exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_envelope(exc.message))

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=_error_envelope(exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; details are logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_envelope(
                "An internal error occurred. Please try again later.",
                request_id=rid,
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: log the stack trace, return a generic 500 with the request id."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_envelope(
                "An unexpected error occurred. Please try again or contact support.",
                request_id=rid,
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Bookmarks API",
        description=(
            "Store, rate and describe links. Titles and descriptions are "
            "sanitized on every response."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookmarks.router, prefix=settings.bookmarks_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `bookmark_api.main:app` to be importable
app = create_app()
