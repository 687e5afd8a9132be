"""
Poker Study Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       `app` at module level is what uvicorn serves.
Who:   Served by `python -m pokerstudy` (which checks the database first) or
       directly by `uvicorn pokerstudy.main:app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware: Request ID → Access Log → Rate Limit (429)  │
    │              → GZip → CORS                               │
    │                                                          │
    │  Routes: /api/players  /api/hands-to-review              │
    │          /api/reviewers  /api/me  /api/backup            │
    │          /api/learning/{leaks,edges,due,mental}          │
    │          /api/templates  /api/notes  /health             │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation→400  Auth→401  NotFound→404  Conflict→409  │
    │    Confirmation→428  Database→500                        │
    └──────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pokerstudy import __version__
from pokerstudy.config import settings
from pokerstudy.database import dispose_engine
from pokerstudy.exceptions import (
    AuthenticationError,
    ConfirmationRequiredError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    PokerStudyError,
    ValidationError,
)
from pokerstudy.middleware.logging import RequestLoggingMiddleware
from pokerstudy.middleware.rate_limit import RateLimitMiddleware
from pokerstudy.middleware.request_id import RequestIDMiddleware, request_id_var
from pokerstudy.routes import (
    backup,
    hands_to_review,
    health,
    learning,
    me,
    players,
    reviewers,
    templates,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] pokerstudy.services.player_service: ...
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup logs where the server listens; shutdown closes pooled connections.

    Configuration and database reachability are checked before this runs,
    by the bootstrap in `pokerstudy.__main__`.
    """
    logger.info("Poker Study backend %s starting on %s:%d", __version__, settings.host, settings.port)
    yield
    logger.info("Poker Study backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the uniform error body: {error, message, details, request_id}."""
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the PokerStudyError hierarchy to HTTP responses.

    Handlers never expose internals (SQL, stack traces) in the body; those
    are logged server-side with the request ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(
            401,
            "unauthorized",
            exc.message,
            headers={"WWW-Authenticate": "Basic"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return error_response(409, "conflict", exc.message, exc.context)

    @app.exception_handler(ConfirmationRequiredError)
    async def handle_confirmation_required(request: Request, exc: ConfirmationRequiredError):
        return error_response(428, "confirmation_required", exc.message, {"dialog": exc.dialog})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(PokerStudyError)
    async def handle_application_error(request: Request, exc: PokerStudyError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a new app."""
    app = FastAPI(
        title="Poker Study API",
        description=(
            "Backend for a poker study tool: opponent notes, hands posted for "
            "review, reviewer names, claimed display names, a mental game "
            "journal, and full backup/restore."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware runs in reverse order of addition: the last added is outermost
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After", "WWW-Authenticate"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(players.router)
    app.include_router(hands_to_review.router)
    app.include_router(reviewers.router)
    app.include_router(me.router)
    app.include_router(learning.router)
    app.include_router(backup.router)
    app.include_router(templates.router)
    app.include_router(health.router)

    return app


app = create_app()
