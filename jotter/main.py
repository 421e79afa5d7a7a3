"""
Jotter Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn jotter.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│   Logging    │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │   /auth/*    │ │   /notes/*   │ │   /health   │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers → {status: "ERROR", message}    │
    │  400 validation/conflict │ 401/403 auth │ 404 │ 500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check production settings, log readiness
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jotter import __version__
from jotter.config import settings
from jotter.database import dispose_engine
from jotter.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    JotterError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from jotter.middleware.logging import RequestLoggingMiddleware
from jotter.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from jotter.routes import auth, health, notes

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error. Please try again."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup (before any other initialization).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Library loggers that log every operation at DEBUG/INFO
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "aiosmtplib", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Jotter Backend %s starting up...", __version__)

    # Misconfiguration is logged, not fatal: /health stays reachable
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Jotter Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """The single error body shape: {"status": "ERROR", "message": ...}."""
    response_headers = dict(headers or {})
    rid = request_id_var.get("")
    if rid:
        response_headers[REQUEST_ID_HEADER] = rid
    return JSONResponse(
        status_code=status_code,
        content={"status": "ERROR", "message": message},
        headers=response_headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        ValidationError / ConflictError    → 400
        AuthenticationError                → 401 (+ WWW-Authenticate)
        ForbiddenError                     → 403
        NotFoundError                      → 404
        UpstreamError / DatabaseError      → 500, generic message, details logged
        RequestValidationError             → 400 (unparseable body)
        Starlette HTTPException            → its own status (unknown route, 405)
        SQLAlchemyError                    → 500
        Exception (fallback)               → 500

    Exception handlers never expose stack traces, SQL or upstream responses.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("Validation error on %s: %s", request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("Conflict on %s: %s", request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(exc.status_code, exc.message, headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        logger.error("Upstream failure on %s: %s | Context: %s", request.url.path, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error on %s: %s | Context: %s", request.url.path, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(JotterError)
    async def handle_app_error(request: Request, exc: JotterError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.info("Malformed request body on %s: %s", request.url.path, exc.errors())
        return error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(SQLAlchemyError)
    async def handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s: %s", request.url.path, str(exc), exc_info=True)
        return error_response(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error on %s: %s", request.url.path, str(exc), exc_info=True)
        return error_response(500, GENERIC_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Jotter API",
        description=(
            "Personal note-taking backend: email-OTP and Google sign-in, "
            "JWT sessions, and owner-scoped CRUD on notes."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # added CORS → Logging → RequestID, runs RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "X-Total-Count"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
