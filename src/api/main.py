"""
FastAPI application entry point.

Run with: uvicorn api.main:create_app --factory
"""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from api.errors import ErrorHandlerMiddleware, register_exception_handlers
from api.routers import bookmarks, health
from core.auth import BearerTokenMiddleware
from core.config import Settings, configure_logging, get_settings
from db.session import create_engine, create_session_factory
from models.base import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings: Settings = app.state.settings

    # Startup: create the engine and session factory
    engine = create_engine(app_settings)
    if app_settings.db_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    app.state.session_factory = create_session_factory(engine)
    logger.info("Bookmarks API started (environment=%s)", app_settings.environment)

    yield

    # Shutdown: release pooled connections
    await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request; terse in production."""

    def __init__(self, app: ASGIApp, production: bool) -> None:
        super().__init__(app)
        self.production = production

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log its outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        if self.production:
            logger.info(
                "%s %s %s - %.1f ms",
                request.method, request.url.path, response.status_code, elapsed_ms,
            )
        else:
            client = request.client.host if request.client else "-"
            logger.info(
                '%s "%s %s HTTP/%s" %s %s - %.1f ms',
                client,
                request.method,
                request.url.path,
                request.scope.get("http_version", "1.1"),
                response.status_code,
                response.headers.get("content-length", "-"),
                elapsed_ms,
            )
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Settings are resolved once and passed explicitly to the middlewares that
    depend on them (token check, error handling, request logging).
    """
    app_settings = settings or get_settings()
    configure_logging(app_settings)

    app = FastAPI(
        title="Bookmarks API",
        description="Token-protected CRUD service for bookmarks.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    register_exception_handlers(app)

    # Middlewares wrap in reverse order of registration: CORS is outermost and the
    # token check runs last, immediately before routing.
    app.add_middleware(BearerTokenMiddleware, api_token=app_settings.api_token)
    app.add_middleware(ErrorHandlerMiddleware, production=app_settings.is_production)
    app.add_middleware(RequestLoggingMiddleware, production=app_settings.is_production)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(bookmarks.router)
    return app
