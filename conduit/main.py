"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health and content, under /api)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration
- Table creation on startup

No business logic belongs here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from conduit import __version__
from conduit.core.config import settings
from conduit.infrastructure.content.database import get_engine, init_db
from conduit.interfaces.content.router import router as content_router
from conduit.interfaces.health import router as health_router
from conduit.shared.errors.handlers import register_error_handlers
from conduit.shared.logging import configure_logging
from conduit.shared.security.headers import SecurityHeadersMiddleware
from conduit.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the content tables exist."""
    init_db(get_engine())
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, sql_echo=settings.database_echo)

    app = FastAPI(
        title=settings.project_name,
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(content_router, prefix=API_PREFIX)

    return app


app = create_app()
