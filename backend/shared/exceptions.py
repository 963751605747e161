"""
Base exception classes for the Folio backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code, so picking the
right parent is what decides the response a caller sees.
"""

from typing import Optional, Any


class FolioError(Exception):
    """
    Base exception for all Folio errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class NotFoundError(FolioError):
    """Resource not found."""

    pass


class ValidationError(FolioError):
    """Input validation failed."""

    pass


class AuthenticationError(FolioError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(FolioError):
    """Authorization failed (insufficient permissions)."""

    pass


class RateLimitError(FolioError):
    """Request rejected by a rate limit."""

    def __init__(
        self,
        message: str,
        retry_after: int,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.retry_after = retry_after
        self.details["retry_after"] = retry_after


class ExternalServiceError(FolioError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
