"""
Agora Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       lifespan() handles startup checks and engine disposal.
Who:   uvicorn (`uvicorn app.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  RateLimit → RequestID → Logging       │
    │               → GZip → CORS                         │
    │                                                     │
    │  Routers:     /api/auth  /api/posts  /api/comments  │
    │               /api/likes  /  /health                │
    │                                                     │
    │  Errors:      AgoraError → status_code + envelope   │
    │               RequestValidationError → 400          │
    │               HTTPException → envelope              │
    │               Exception → 500                       │
    └─────────────────────────────────────────────────────┘

Every error leaves the API as
    {"success": false, "message": "...", "errors": [{"field", "message"}]?}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import create_all_tables, dispose_engine
from app.exceptions import AgoraError, DatabaseError, RateLimitExceededError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, comments, health, likes, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] app.services.post_service: Post 3 created ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request chatter from these is covered by agora.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Agora Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The server still starts so /health can report; tokens are forgeable until fixed
        logger.error("Configuration error: %s", str(e))

    if settings.db_auto_create:
        await create_all_tables()
        logger.info("Database tables ensured (DB_AUTO_CREATE=true)")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Agora Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(message: str, errors: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def _field_path(loc) -> str:
    # Drop the source prefix: ("body", "title") → "title", ("path", "post_id") → "postId"
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header", "cookie"):
        source, parts = parts[0], parts[1:]
        if source in ("path", "query"):
            parts = [to_camel(parts[0])] + parts[1:]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

        AgoraError subclasses    → their status_code (400/401/403/404/429/500)
        RequestValidationError   → 400 "Validation failed" + per-field errors
        HTTPException            → its status code (404 "Route not found")
        Exception                → 500, stack trace logged server-side only
    """

    @app.exception_handler(AgoraError)
    async def handle_agora_error(request: Request, exc: AgoraError):
        rid = request_id_var.get("")
        headers = {}

        if isinstance(exc, DatabaseError):
            logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
            message = "An internal error occurred. Please try again later."
        elif exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            message = exc.message
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            message = exc.message

        if isinstance(exc, RateLimitExceededError):
            headers["Retry-After"] = str(exc.retry_after)

        errors = exc.errors if isinstance(exc, ValidationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message, errors),
            headers=headers or None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_path(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        logger.info("[%s] Validation failed: %s", request_id_var.get(""), errors)
        return JSONResponse(status_code=400, content=error_body("Validation failed", errors))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = "Route not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body("An unexpected error occurred. Please try again later."),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Agora API",
        description=(
            "Social feed backend: accounts with bearer-token auth, posts, "
            "comments and likes with derived counts and page-number pagination."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RateLimit → RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests to a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(likes.router)

    return app


app = create_app()
