"""
Employee API - FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, middleware registration, route mounting,
       exception handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Run by uvicorn (`uvicorn employee_api.main:app`) or the `employee-api`
       console script.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  Request ID → Logging → CORS                │
    │                                                          │
    │  Routes:                                                 │
    │    /api/employees  (POST, GET, GET _id, GET, PUT, DELETE)│
    │    /  and  /health                                       │
    │                                                          │
    │  Exception Handlers:                                     │
    │    ValidationError / RequestValidationError → 400        │
    │    NotFoundError → 404    DatabaseError → 500            │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (MONGO_URI must be set) - abort if not
    3. Connect to MongoDB and initialize Beanie - abort if unreachable

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from employee_api import __version__
from employee_api.config import settings
from employee_api.database import close_db, init_db
from employee_api.exceptions import DatabaseError, NotFoundError, ValidationError
from employee_api.middleware.logging import RequestLoggingMiddleware
from employee_api.middleware.request_id import RequestIDMiddleware, request_id_var
from employee_api.routes import employees, health
from employee_api.services.employee_service import ALL_FIELDS_REQUIRED

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup (before any other initialization).
    Format:  2024-07-03T12:00:00 [INFO] employee_api.services.employee_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    # uvicorn.access duplicates our RequestLoggingMiddleware lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to MongoDB before serving and disconnect afterwards.

    Unlike a service with optional dependencies, every route here needs the
    database, so both failures below abort startup: uvicorn then exits with
    a non-zero status instead of serving 500s.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Employee API %s starting up...", __version__)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        raise

    try:
        await init_db()
    except PyMongoError as e:
        logger.error("MongoDB connection error: %s", str(e))
        raise

    logger.info(
        "Application URL: http://%s:%d (docs at /docs)",
        settings.backend_host,
        settings.backend_port,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Employee API shutting down...")
    await close_db()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_request_errors(exc: RequestValidationError) -> tuple:
    """
    Turn FastAPI's per-field error list into (message, details).

    A missing body yields the same message as missing fields. Otherwise each
    failing field contributes one line; messages raised by our own validators
    are used verbatim (without Pydantic's "Value error, " prefix).
    """
    errors = []
    for err in exc.errors():
        if err.get("type") == "missing":
            return ALL_FIELDS_REQUIRED, {"missing": [str(err["loc"][-1])]}
        field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else err.get("msg", "Invalid value")
        errors.append({"field": field, "message": message})

    if not errors:
        return "Invalid request", None
    return "; ".join(e["message"] for e in errors), {"errors": errors}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error format.

    Handler hierarchy:
        ValidationError (incl. DuplicateEmployeeError) → 400
        RequestValidationError (body/path parsing)      → 400
        NotFoundError                                   → 404
        DatabaseError                                   → 500 (generic message)
        Exception (fallback)                            → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input - tell them what's wrong."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context or None,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body or path could not be parsed - same 400 shape as our own errors."""
        rid = request_id_var.get("")
        message, details = _describe_request_errors(exc)
        logger.warning("[%s] Request validation error: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": details,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Database error - generic message to user, details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Why factory: tests can build a fresh app; importing this module has no
    side effects beyond building the module-level `app`.
    """
    app = FastAPI(
        title="Employee API",
        description=(
            "CRUD operations on employee records stored in MongoDB. "
            "Employees can be addressed by their custom employee_id or by "
            "the _id MongoDB generated."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added CORS → Logging → RequestID, runs RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(employees.router)
    app.include_router(health.router)

    return app


# uvicorn expects `employee_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    uvicorn.run(
        "employee_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
