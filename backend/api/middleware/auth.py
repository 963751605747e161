"""
JWT authentication dependencies.

Validates Supabase JWT tokens via the auth service and gates admin-only
endpoints on the role carried in ``app_metadata``.
"""

import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError, MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.security.audit import SecurityEventLog
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service, get_security_log
from .client import get_client_ip

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
    security_log: SecurityEventLog = Depends(get_security_log),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Invalid or expired tokens are recorded as failed_auth security events.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError()

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError as e:
        security_log.log_failed_auth(get_client_ip(request), request.url.path, e.message)
        raise


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication; a bad
    token is treated as no token.
    """
    if credentials is None:
        return None

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError as e:
        logger.debug(f"Ignoring invalid optional token: {e.message}")
        return None


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """
    Dependency that requires an authenticated admin.

    Raises:
        InsufficientPermissionsError: If the user's role is not admin
    """
    if not user.is_admin:
        raise InsufficientPermissionsError(ADMIN_ROLE, user.role)
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(require_admin)
