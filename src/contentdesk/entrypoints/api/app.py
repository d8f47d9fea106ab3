"""FastAPI application definition."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contentdesk import __version__

from .deps import lifespan, settings, setup_logging
from .errors import register_exception_handlers
from .middleware.rate_limit import RateLimitConfig, RateLimitMiddleware
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import api_router


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routes."""
    setup_logging()

    application = FastAPI(
        title="contentdesk",
        description="Content dashboard authentication and access control API",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,  # Prevent 307 redirects that lose auth headers
    )

    register_exception_handlers(application)

    # Added last-to-first: logging wraps CORS wraps rate limiting
    application.add_middleware(
        RateLimitMiddleware,
        config=RateLimitConfig(requests_per_minute=settings.rate_limit_per_minute),
        enabled=settings.rate_limit_enabled,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    # Include API routes
    application.include_router(api_router, prefix="/api")

    @application.get("/api/health")
    async def health_check() -> dict[str, object]:
        """Health check endpoint."""
        return {"success": True, "status": "healthy", "environment": settings.app_env}

    return application


app = create_app()
