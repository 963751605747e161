"""
Auth logs module exceptions.
"""

from shared.exceptions import FolioError, ValidationError


class AuthLogError(FolioError):
    """Base exception for auth log errors."""

    pass


class UnknownAuthLogBackendError(AuthLogError):
    """Raised when AUTH_LOG_BACKEND names a backend that doesn't exist."""

    def __init__(self, backend: str):
        super().__init__(
            f"Unknown auth log backend: {backend}",
            code="UNKNOWN_AUTH_LOG_BACKEND",
            details={"backend": backend},
        )


class InvalidRetentionError(ValidationError):
    """Raised when a purge is requested with a non-positive age."""

    def __init__(self, days: int):
        super().__init__(
            f"Retention must be at least one day, got {days}",
            code="INVALID_RETENTION",
            details={"days": days},
        )
