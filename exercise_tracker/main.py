"""
Exercise Tracker — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the store handle, middleware, exception
       handlers and routers; `app` is the module-level instance uvicorn loads
       (uvicorn exercise_tracker.main:app), and `run()` backs the
       `exercise-tracker` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│ RateLim  │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /api/users.. │ │ GET /    │ │ GET /health     │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ClientInput→400 │ NotFound→404 │ other→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, open the Database handle (unless one was
              injected), log the listen address.
    Shutdown: dispose the handle if the lifespan opened it.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from exercise_tracker import __version__
from exercise_tracker.config import Settings, settings as default_settings
from exercise_tracker.database import Database
from exercise_tracker.exceptions import ExerciseTrackerError, InternalFailure
from exercise_tracker.middleware.logging import RequestLoggingMiddleware
from exercise_tracker.middleware.rate_limit import RateLimitMiddleware
from exercise_tracker.middleware.request_id import RequestIDMiddleware, request_id_var
from exercise_tracker.routes import health, pages, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("Exercise Tracker %s starting up...", __version__)

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings(config)
    logger.info("Store: %r", app.state.database)
    logger.info("Your app is listening on port %d", config.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Exercise Tracker shutting down...")
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text responses.

    Handler hierarchy:
        ExerciseTrackerError    → exc.status_code, body exc.message
        RequestValidationError  → 400 (FastAPI's own path/query validation)
        HTTPException           → its status, body its detail
        Exception (fallback)    → 500 "Server error"

    Context dicts and stack traces are logged, never returned.
    """

    @app.exception_handler(ExerciseTrackerError)
    async def handle_app_error(request: Request, exc: ExerciseTrackerError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        field = ".".join(str(part) for part in errors[0]["loc"]) if errors else "request"
        logger.info("[%s] Request validation failed: %s", rid, errors)
        return PlainTextResponse(f"Invalid `{field}`", status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        failure = InternalFailure()
        return PlainTextResponse(failure.message, status_code=failure.status_code)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:   settings to use; defaults to the environment-loaded singleton
        database: an already-open store handle (tests inject one backed by
                  in-memory SQLite); when None the lifespan opens one

    Returns:
        Fully configured FastAPI instance.
    """
    config = config or default_settings

    app = FastAPI(
        title="Exercise Tracker API",
        description="Create users, log exercises against them, and read filtered exercise logs.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → RateLimit → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.rate_limit_requests,
        window_seconds=config.rate_limit_window,
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(health.router)
    app.include_router(pages.router)
    app.mount(
        "/public",
        StaticFiles(directory=config.public_dir, check_dir=False),
        name="public",
    )

    return app


def run() -> None:
    """Console entry point: serve the app on settings.host:settings.port."""
    import uvicorn

    uvicorn.run(
        "exercise_tracker.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_config=None,
    )


app = create_app()
