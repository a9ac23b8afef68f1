"""
Blog Backend - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       wired to one BlogStore (built from settings unless one is passed in).
Who:   Called by uvicorn (uvicorn app.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  /api/categories[/{id}]  /api/posts[/{id}]          │
    │  /  /posts/{id}  /health                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/Conflict/Reference→400  NotFound→404    │
    │  Method→405 (+Allow)  Store→500                     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, optionally create tables, log ready
    Shutdown: dispose the store's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    BlogError,
    ConflictError,
    MethodNotAllowedError,
    NotFoundError,
    ReferenceViolationError,
    UnhandledStoreError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import categories, health, pages, posts
from app.services.store import BlogStore

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    store: BlogStore = app.state.store
    logger.info("Blog backend %s starting up...", __version__)

    if settings.create_schema_on_startup:
        await store.create_schema()
        logger.info("Database schema created from ORM metadata")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Blog backend shutting down...")
    await store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(exc: BlogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler table:
        ValidationError          → 400 {"error": message}
        ConflictError            → 400
        ReferenceViolationError  → 400
        NotFoundError            → 404
        UnhandledStoreError      → 500 (store message passed through)
        RequestValidationError   → 400 {"error": "Invalid request body"}
        MethodNotAllowedError    → 405 "Method Not Allowed" + the resource's Allow list
        router 405 (pages)       → 405 "Method Not Allowed" + Starlette's Allow header
        other HTTPException      → its status, {"error": detail}
        Exception (fallback)     → 500 {"error": "Server error"}
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(exc)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return _error_response(exc)

    @app.exception_handler(ReferenceViolationError)
    async def handle_reference_violation(request: Request, exc: ReferenceViolationError):
        logger.info(
            "[%s] Reference violation: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error_response(exc)

    @app.exception_handler(UnhandledStoreError)
    async def handle_store_error(request: Request, exc: UnhandledStoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error_response(exc)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        return PlainTextResponse(
            exc.message,
            status_code=exc.status_code,
            headers={"Allow": ", ".join(exc.allowed)},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=405,
                headers=getattr(exc, "headers", None),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"error": "Server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[BlogStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Data-access client to serve from. Defaults to a BlogStore on
               settings.database_url; tests pass one bound to in-memory SQLite.
    """
    app = FastAPI(
        title="Blog API",
        description="Posts and categories over a relational store, plus two HTML pages.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store or BlogStore.from_url(settings.database_url)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(categories.router)
    app.include_router(posts.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    return app


app = create_app()
