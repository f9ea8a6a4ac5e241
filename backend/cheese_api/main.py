"""
Cheese Catalog Backend — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires store → service once, then registers middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn cheese_api.main:app`), the `cheese-api` console
       script, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes ({api_prefix}):                             │
    │    GET /health    POST|GET /cheeses                 │
    │    GET|PUT|DELETE /cheeses/{id}                     │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError → 400 text                       │
    │    DatabaseError / ImageReadError / other → 500     │
    │                                                     │
    │  app.state.cheese_service                           │
    │    = CheeseService(CheeseRepository(sessions))      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, optionally create tables, log readiness
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse, Response

from cheese_api import __version__
from cheese_api.config import settings
from cheese_api.database import async_session_factory, create_tables, dispose_engine
from cheese_api.exceptions import CheeseApiError, ValidationError
from cheese_api.middleware.logging import RequestLoggingMiddleware
from cheese_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from cheese_api.repositories.cheese_repository import CheeseRepository
from cheese_api.routes import cheeses, health
from cheese_api.services.cheese_service import CheeseService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure root logging once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    (container runtimes collect stdout).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Cheese Catalog Backend %s starting up...", __version__)

    if settings.db_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info(
        "Server ready at http://%s:%d%s",
        settings.backend_host,
        settings.backend_port,
        settings.api_prefix,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Cheese Catalog Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to responses.

        ValidationError      → 400, the static message as text/plain
        CheeseApiError       → 500, empty body (DatabaseError, ImageReadError)
        Exception (fallback) → 500, empty body

    Server-side failures are logged with their context; nothing about them
    is sent to the client except the request id header.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Validation failed on %s: %s", rid, exc.field, exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(CheeseApiError)
    async def handle_server_error(request: Request, exc: CheeseApiError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid,
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return Response(status_code=500, headers={REQUEST_ID_HEADER: rid})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return Response(status_code=500, headers={REQUEST_ID_HEADER: rid})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(cheese_service: Optional[CheeseService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        cheese_service: Service to expose through the routes. Defaults to a
            CheeseService over a CheeseRepository on the configured database.
    """
    app = FastAPI(
        title="Cheese Catalog API",
        description="Create, list, update and delete cheeses with their images.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Wiring ────────────────────────────────────────────────────────────
    if cheese_service is None:
        cheese_service = CheeseService(CheeseRepository(async_session_factory))
    app.state.cheese_service = cheese_service

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    # Image-heavy list responses compress well
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(cheeses.router)

    return app


def main() -> None:
    """Console entry point: serve the app with uvicorn on the configured address."""
    uvicorn.run(
        "cheese_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `cheese_api.main:app` to be importable
app = create_app()
