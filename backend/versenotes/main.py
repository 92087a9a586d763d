"""
VerseNotes Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn imports `versenotes.main:app`; tests call create_app() directly.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    /api/signup  /api/login                          │
    │    /api/posts   /api/highlights   /api/health       │
    │                                                     │
    │  app.state:                                         │
    │    database, user_service, post_service,            │
    │    highlight_service                                │
    │                                                     │
    │  Exception Handlers:                                │
    │    VerseNotesError / request validation → 200       │
    │    {"success": false, "message": ...}               │
    │    anything else → 500                              │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → CREATE TABLE IF NOT EXISTS (errors logged, not fatal)
    Shutdown: dispose database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from versenotes import __version__
from versenotes.config import Settings, settings as default_settings
from versenotes.database import Database
from versenotes.exceptions import (
    AuthError,
    ConflictError,
    StorageError,
    ValidationError,
    VerseNotesError,
)
from versenotes.middleware.logging import RequestLoggingMiddleware
from versenotes.middleware.request_id import RequestIDMiddleware, request_id_var
from versenotes.routes import auth, health, highlights, posts
from versenotes.schemas.common import FailureResponse
from versenotes.services.access_policy import AccessPolicy, PermissiveAccessPolicy
from versenotes.services.highlight_service import HighlightService
from versenotes.services.password_hasher import PasswordHasher
from versenotes.services.post_service import PostService
from versenotes.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: 2026-01-15T12:00:00 [INFO] versenotes.services.user_service: ...
    Output: stdout (captured by Docker / the process manager)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement / request at INFO; our middleware covers access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: initialize the schema. Shutdown: release the connection pool.

    A failure to create tables (database down, bad credentials) is logged
    and startup continues; each request then fails with a StorageError
    until the database becomes reachable.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("VerseNotes Backend %s starting up...", __version__)

    try:
        await database.create_tables()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error("Error initializing database: %s", str(e), exc_info=True)

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    logger.info("VerseNotes Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _failure(message: str, status_code: int = 200, request_id: Optional[str] = None) -> JSONResponse:
    body = FailureResponse(message=message, request_id=request_id)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to the failure envelope.

    Handler hierarchy:
        ValidationError         → 200 {success: false}   (WARNING)
        ConflictError           → 200 {success: false}   (INFO)
        AuthError               → 200 {success: false}   (INFO)
        StorageError            → 200 {success: false}   (ERROR, context logged)
        VerseNotesError (base)  → 200 {success: false}
        RequestValidationError  → 200 {success: false}   (malformed body / path)
        Exception (fallback)    → 500 {success: false, request_id}

    Security: the response never carries driver errors, SQL or stack traces.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _failure(exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return _failure(exc.message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        logger.info("[%s] Auth failure on %s: %s", request_id_var.get(""), request.url.path, exc.message)
        return _failure(exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _failure(exc.message)

    @app.exception_handler(VerseNotesError)
    async def handle_app_error(request: Request, exc: VerseNotesError):
        logger.warning("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _failure(exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """
        FastAPI rejected the body or a path parameter before our code ran
        (invalid JSON, userId not an integer, ...). Same envelope as our own
        validation errors.
        """
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
            for err in exc.errors()
        )
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), problems)
        return _failure(f"Invalid request: {problems}")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full traceback logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _failure(
            "An unexpected error occurred. Please try again later.",
            status_code=500,
            request_id=rid,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    access_policy: Optional[AccessPolicy] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings:  Configuration; defaults to the environment-loaded settings
        access_policy: Highlight access decisions; defaults to permissive

    The Database handle (connection pool) and services are built here and
    attached to app.state; nothing is shared between two apps.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="VerseNotes API",
        description="Accounts, posts and verse highlights backed by PostgreSQL.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    app.state.settings = app_settings
    app.state.database = Database(app_settings)
    app.state.user_service = UserService(PasswordHasher(rounds=app_settings.password_hash_rounds))
    app.state.post_service = PostService()
    app.state.highlight_service = HighlightService(access_policy or PermissiveAccessPolicy())

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(highlights.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `versenotes.main:app` to be importable
app = create_app()
