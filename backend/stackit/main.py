"""
StackIt Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn stackit.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌─────────┐ ┌──────────────┐ ┌──────────┐  │
    │  │  Req ID  │→│ Logging │→│  Rate Limit  │→│   CORS   │  │
    │  └──────────┘ └─────────┘ └──────────────┘ └──────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  /api/auth  /api/questions  /api/answers  /api/users     │
    │  /api/tags  /api/notifications  /api/admin  /health      │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400  Auth→401  Forbidden→403  NotFound→404   │
    │  Database→500    anything else→500                       │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, ready banner
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from stackit import __version__
from stackit.config import settings
from stackit.database import dispose_engine
from stackit.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    PermissionDeniedError,
    StackItError,
    ValidationError,
)
from stackit.middleware.logging import RequestLoggingMiddleware
from stackit.middleware.rate_limit import RateLimitMiddleware
from stackit.middleware.request_id import RequestIDMiddleware, request_id_var
from stackit.responses import error_response
from stackit.routes import admin, answers, auth, health, notifications, questions, tags, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2025-01-15T12:00:00 [INFO] stackit.services.answer_service: ...

    Third-party loggers that log every query or connection are raised to
    WARNING; our own access log replaces uvicorn's.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("StackIt Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving so /health can report; tokens are still signed
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("StackIt Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the StackItError hierarchy to HTTP responses.

    Handler hierarchy:
        ValidationError         → 400 validation_error
        AuthenticationError     → 401 unauthorized (+ WWW-Authenticate)
        PermissionDeniedError   → 403 forbidden
        NotFoundError           → 404 not_found
        DatabaseError           → 500 server_error (context logged only)
        StackItError (base)     → 500 server_error
        Exception (fallback)    → 500 internal_server_error

    Request body schema errors stay FastAPI's own 422 responses. The 429
    body comes from RateLimitMiddleware, built with the same error_response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(
            401, "unauthorized", exc.message, headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        logger.info("[%s] Forbidden %s %s: %s",
                    request_id_var.get(""), request.method, request.url.path, exc.message)
        return error_response(403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return error_response(
            500, "server_error", "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(StackItError)
    async def handle_stackit_error(request: Request, exc: StackItError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Stack trace goes to the log only, never to the client
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
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
        title="StackIt API",
        description=(
            "Minimal Q&A forum: ask questions, answer them, vote, accept the "
            "best answer and get notified when someone responds."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → RateLimit → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(users.router)
    app.include_router(tags.router)
    app.include_router(notifications.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    return app


app = create_app()
