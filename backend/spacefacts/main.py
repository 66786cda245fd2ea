"""
Space Facts API - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan builds the Database handle and PhotoStorage at startup
       and releases the database at shutdown.
Who:   Run by uvicorn (`uvicorn spacefacts.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌───────────────┐ ┌──────┐  │
    │  │ Req ID │→│ Logging │→│ CORS (1 orig) │→│ 500s │  │
    │  └────────┘ └─────────┘ └───────────────┘ └──────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │ / health │ │ /planets CRUD│ │ photos up/down  │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers → {"error": "<message>"}        │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ NotFound→404 │ Validation/BadRequest→400 │ 500 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → Database handle (optionally create tables) →
              PhotoStorage (creates UPLOAD_DIR)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from spacefacts import __version__
from spacefacts.config import settings
from spacefacts.database import Database
from spacefacts.exceptions import ErrorKind, SpaceFactsError
from spacefacts.middleware.errors import UnhandledErrorMiddleware
from spacefacts.middleware.logging import RequestLoggingMiddleware
from spacefacts.middleware.request_id import RequestIDMiddleware, request_id_var
from spacefacts.routes import health, photos, planets
from spacefacts.services.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-query / per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the process-wide resources.

    app.state.database       Database handle used by every request session
    app.state.photo_storage  PhotoStorage rooted at UPLOAD_DIR
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Space Facts API %s starting up...", __version__)

    database = Database.from_settings(settings)
    if settings.db_create_tables:
        await database.create_all()
        logger.info("Database tables ensured")
    app.state.database = database

    app.state.photo_storage = PhotoStorage(settings.upload_dir, settings.max_photo_size)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("CORS origin: %s", settings.cors_origin)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Space Facts API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _validation_details(exc: RequestValidationError) -> list:
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body",
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    The single place where error response bodies are built.

    Every error leaves the API as {"error": "<message>"}; validation failures
    add a "details" list of {"field", "message"} entries.

    Handler hierarchy:
        SpaceFactsError         → status from its ErrorKind
        RequestValidationError  → 400 (framework-level parameter errors)
        HTTPException           → its own status; 404 becomes "Cannot METHOD path"
        Exception (fallback)    → 500, stack trace logged server-side only

    Route-level crashes are answered by UnhandledErrorMiddleware, inside
    CORS and request-id; the Exception handler here only sees failures
    raised by the outer middleware themselves.
    """

    @app.exception_handler(SpaceFactsError)
    async def handle_spacefacts_error(request: Request, exc: SpaceFactsError):
        rid = request_id_var.get("")
        content = {"error": exc.message}

        if exc.kind is ErrorKind.VALIDATION_FAILED:
            content["details"] = exc.context.get("errors", [])
            logger.info("[%s] Validation failed on %s: %s", rid, request.url.path, content["details"])
        elif exc.kind is ErrorKind.NOT_FOUND:
            logger.info("[%s] %s", rid, exc.message)
        elif exc.kind is ErrorKind.BAD_REQUEST:
            logger.warning("[%s] Bad request: %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.error("[%s] %s error: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context)

        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        logger.info("[%s] Request validation failed on %s: %s", request_id_var.get(""), request.url.path, details)
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Cannot {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: a FastAPI instance whose resources are created by `lifespan`.
             Tests that skip the lifespan install app.state.database and
             app.state.photo_storage themselves.
    """
    app = FastAPI(
        title="Space Facts API",
        description="CRUD API for planets, with photo uploads.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition:
    # RequestID → Logging → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(photos.router)
    app.include_router(planets.router)

    return app


app = create_app()
