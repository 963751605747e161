"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """Interface for authentication operations."""

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with ID, email and application role

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
