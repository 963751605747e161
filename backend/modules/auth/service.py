"""
Authentication service implementation.

Validates Supabase JWT tokens and resolves the caller's application role.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

DEFAULT_ROLE = "viewer"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are verified locally with the project's JWT secret; no call to
    the identity provider is made per request.
    """

    def __init__(self):
        self._settings = get_settings()

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
            jwt_payload = JWTPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except ValueError:
            # Signature was fine but the claims don't have the Supabase shape
            raise InvalidTokenError("Invalid token claims")

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            name=jwt_payload.display_name,
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            role=jwt_payload.app_role or DEFAULT_ROLE,
        )
