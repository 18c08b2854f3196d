"""
FWRCFN Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       lifespan() connects to MongoDB on startup and closes it on shutdown.
Who:   uvicorn (`uvicorn fwrcfn.main:app`) or `run()` / the `fwrcfn` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  GET /  GET /api/status  POST /api/register         │
    │  POST /api/login  GET /api/fridges                  │
    │  POST /api/sample-data                              │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/UserExists/Credentials→400              │
    │  Token→401  DB unavailable/DB/unexpected→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config warnings → MongoDB connect (failure is logged,
              not fatal) → ready banner
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fwrcfn import __version__
from fwrcfn.config import settings
from fwrcfn.database import mongo
from fwrcfn.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    FwrcfnError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from fwrcfn.middleware.logging import RequestLoggingMiddleware
from fwrcfn.middleware.request_id import RequestIDMiddleware, request_id_var
from fwrcfn.routes import auth, fridges, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-06-10T12:00:00 [INFO] fwrcfn.database: MongoDB connected successfully
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("FWRCFN Backend starting up...")
    settings.warn_insecure_defaults()

    # A failed connect leaves data routes answering 500; the process stays up
    if await mongo.connect():
        logger.info("Server is ready to accept requests")
    else:
        logger.warning("Starting without a database connection")

    base_url = f"http://localhost:{settings.port}"
    logger.info("Server running on port %d", settings.port)
    logger.info("Access the API at: %s", base_url)
    logger.info("Check status at: %s/api/status", base_url)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("FWRCFN Backend shutting down...")
    await mongo.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        RequestValidationError                   → 400
        UserAlreadyExistsError                   → 400
        InvalidCredentialsError                  → 400
        InvalidTokenError                        → 401
        DatabaseUnavailableError                 → 500 "Database not connected"
        DatabaseError                            → 500 "Server error"
        FwrcfnError (base)                       → 500
        Exception (fallback)                     → 500 "Server error"

    Responses never include stack traces or driver messages; those are
    logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body on %s", rid, request.url.path)
        return _error_response(
            400,
            "validation_error",
            "Request body is invalid",
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(UserAlreadyExistsError)
    async def handle_user_exists(request: Request, exc: UserAlreadyExistsError):
        rid = request_id_var.get("")
        logger.info("[%s] Registration rejected: email already registered", rid)
        return _error_response(400, "user_exists", exc.message)

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        """Same body whatever the reason; the reason only reaches the log."""
        rid = request_id_var.get("")
        logger.warning("[%s] Failed login: %s", rid, exc.context.get("reason", "unknown"))
        return _error_response(400, "invalid_credentials", exc.message)

    @app.exception_handler(InvalidTokenError)
    async def handle_invalid_token(request: Request, exc: InvalidTokenError):
        """Answers any route that decodes a session token; none of the current routes do."""
        return _error_response(401, "invalid_token", exc.message)

    @app.exception_handler(DatabaseUnavailableError)
    async def handle_database_unavailable(request: Request, exc: DatabaseUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] %s %s rejected: database not connected", rid, request.method, request.url.path)
        return _error_response(500, "database_unavailable", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "server_error", "Server error")

    @app.exception_handler(FwrcfnError)
    async def handle_app_error(request: Request, exc: FwrcfnError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "server_error", "Server error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, "server_error", "Server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="FWRCFN API",
        description="Community fridge directory: user accounts and fridge locations.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(fridges.router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "fwrcfn.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
