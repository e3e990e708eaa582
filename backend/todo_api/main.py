"""
Todo REST Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own TodoStore attached to app.state.
Who:   uvicorn (uvicorn todo_api.main:app), `python -m todo_api`, and tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │  Routes:      /todos, /todos/{id}, /, /health       │
    │  Exception Handlers:                                │
    │    ValidationError→400 │ NotFound→404 │ File→500    │
    │  State:       app.state.todo_service (store inside) │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, load the data file when persistence is on.
              A malformed data file aborts startup.
    Shutdown: log only; every mutation has already been written.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api import __version__
from todo_api.config import settings
from todo_api.dependencies import build_todo_service
from todo_api.exceptions import (
    TodoApiError,
    ValidationError,
    NotFoundError,
    PersistenceError,
)
from todo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from todo_api.middleware.logging import RequestLoggingMiddleware
from todo_api.routes import health, todos
from todo_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] todo_api.access: get todo=0 GET /todos/0 -> 200 0.4ms [a1b2c3d4]
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: set up logging and load the data file into the store.
    Shutdown: log.

    PersistenceError from load_from_file() is re-raised on purpose: serving
    an empty store over a corrupt file would destroy the file on the next
    write.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Todo REST Backend %s starting up...", __version__)

    store = app.state.todo_service.store
    if store.file_persistence:
        try:
            await store.load_from_file()
        except PersistenceError as e:
            logger.critical("Cannot start: %s", str(e))
            raise
        logger.info("File persistence enabled: %s", store.data_file.resolve())
    else:
        logger.info("File persistence disabled; todos live in memory only")

    logger.info("Backend running at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Todo REST Backend shutting down (%d todos in store)", len(store))


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status: int, title: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Builds the `{"error": {"status", "title"}}` body every error uses."""
    return JSONResponse(
        status_code=status,
        content={"error": {"status": status, "title": title}},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError        → 400 (body could not be decoded / update failed)
        NotFoundError          → 404 Record Not Found
        PersistenceError       → 500 (data file could not be written)
        TodoApiError (base)    → exc.status
        HTTPException          → its status (unknown route, wrong method)
        Exception (fallback)   → 500

    Context dicts are logged server-side only, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s: %s | Context: %s", rid, request.url.path, exc.title, exc.context)
        return error_response(exc.status, exc.title)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(exc.status, exc.title)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        """The store changed but the data file did not; memory and disk now disagree."""
        rid = request_id_var.get("")
        logger.critical("[%s] Persistence error: %s | Context: %s", rid, str(exc), exc.context)
        return error_response(exc.status, exc.title)

    @app.exception_handler(TodoApiError)
    async def handle_app_error(request: Request, exc: TodoApiError):
        rid = request_id_var.get("")
        logger.error("[%s] %s | Context: %s", rid, exc.title, exc.context)
        return error_response(exc.status, exc.title)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Keeps headers such as Allow on 405
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return error_response(500, "Internal Server Error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[TodoStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Serve this store instead of one built from settings. Tests pass
               a fresh in-memory (or tmp_path-backed) store per case.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Todo REST API",
        description=(
            "Minimal todo list backend: create, read, update, delete and bulk-delete "
            "todos, kept in memory with optional CSV file persistence."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.todo_service = build_todo_service(store=store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
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
    app.include_router(health.router)
    app.include_router(todos.router)

    return app


# uvicorn expects `todo_api.main:app` to be importable
app = create_app()
