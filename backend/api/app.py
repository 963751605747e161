"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware.security_headers import SecurityHeadersMiddleware
from .routes import health
from modules.auth_logs.routes import admin_router as admin_logs_router
from modules.auth_logs.routes import router as auth_track_router
from modules.chat.routes import router as chat_router
from modules.webhooks.routes import router as webhooks_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Configures logging and builds the stateful services (rate limiter,
    security log, auth event log) before the first request.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)

    get_container().initialize()

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio backend: AI chat, auth activity logging and request admission",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_track_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admin_logs_router, prefix="/api/admin", tags=["admin"])
    app.include_router(chat_router, prefix="/api/chat", tags=["chat"])
    app.include_router(webhooks_router, prefix="/api/webhooks", tags=["webhooks"])

    return app


# Application instance for uvicorn
app = create_app()
