"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.dependencies import get_container, reset_container
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Svix-format test secret (base64 payload after the whsec_ prefix)
TEST_WEBHOOK_SECRET = "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    role: Optional[str] = None,
    secret: str = TEST_JWT_SECRET,
    user_metadata: Optional[dict] = None,
) -> str:
    """
    Create a test JWT token shaped like a Supabase access token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        role: Application role placed in app_metadata (None omits it)
        secret: Signing secret
        user_metadata: Profile claims (names)

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "app_metadata": {"role": role} if role else {},
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """
    Pin configuration and give every test a fresh service container.

    The container owns the rate limiter windows and the in-memory logs, so
    resetting it keeps tests independent.
    """
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("IDENTITY_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    monkeypatch.setenv("AUTH_LOG_BACKEND", "memory")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("CHAT_PROVIDER", raising=False)

    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()


@pytest.fixture
def container():
    """The service container used by the app for this test."""
    return get_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid non-admin auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Authorization headers for a user whose app_metadata role is admin."""
    token = create_test_token(user_id="admin-1", email="admin@example.com", role="admin")
    return {"Authorization": f"Bearer {token}"}
