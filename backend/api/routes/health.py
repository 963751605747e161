"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    auth_log_backend: str
    chat_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which storage backend and chat provider this instance is
    configured to use.
    """
    settings = get_settings()
    chat_provider = settings.chat_provider or ("groq" if settings.groq_api_key else "ollama")
    return ReadinessResponse(
        status="ready",
        auth_log_backend=settings.auth_log_backend,
        chat_provider=chat_provider,
    )
