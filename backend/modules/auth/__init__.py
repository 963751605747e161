"""
Authentication module.

Validates identity-provider JWTs and derives the caller's role.

Public API:
- IAuthService: Interface for auth operations
- AuthService: Supabase JWT implementation
- JWTPayload: Decoded token claims
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import JWTPayload
from .service import AuthService
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interface
    "IAuthService",
    "AuthService",
    # Models
    "JWTPayload",
    # Exceptions
    "AuthNotConfiguredError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
]
