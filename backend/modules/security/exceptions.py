"""
Security module exceptions.

Admission guard rejections and sanitizer failures. Each one maps to a
client error through its shared base class; the API layer never exposes
anything beyond the message and code.
"""

from typing import Optional

from shared.exceptions import (
    FolioError,
    ValidationError,
    AuthorizationError,
    RateLimitError,
)


class InvalidFormatError(ValidationError):
    """Raised when input does not have the expected shape (e.g. email)."""

    def __init__(self, message: str = "Invalid format", field: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_FORMAT",
            details={"field": field} if field else {},
        )


class MethodNotAllowedError(AuthorizationError):
    """Raised when a guarded route is called with a disallowed HTTP method."""

    def __init__(self, method: str):
        super().__init__(
            f"Method {method} not allowed",
            code="METHOD_NOT_ALLOWED",
            details={"method": method},
        )


class InvalidOriginError(AuthorizationError):
    """Raised when the Origin header is not in the allow-list."""

    def __init__(self, origin: str):
        super().__init__(
            "Invalid origin",
            code="INVALID_ORIGIN",
            details={"origin": origin},
        )


class InvalidContentTypeError(AuthorizationError):
    """Raised when the request content type is not accepted by the route."""

    def __init__(self, content_type: Optional[str]):
        super().__init__(
            "Invalid content type",
            code="INVALID_CONTENT_TYPE",
            details={"content_type": content_type or ""},
        )


class RateLimitExceededError(RateLimitError):
    """Raised when a client exceeds the request budget of a bucket."""

    def __init__(self, bucket: str, retry_after: int):
        super().__init__(
            "Too many requests. Please try again later.",
            retry_after=retry_after,
            code="RATE_LIMIT_EXCEEDED",
            details={"bucket": bucket},
        )


class SuspiciousContentError(ValidationError):
    """
    Raised when user-supplied text matches a suspicious pattern.

    The detection reason is kept for the security log but is deliberately
    absent from the client-facing details.
    """

    def __init__(self, reason: str):
        super().__init__("Invalid message content", code="SUSPICIOUS_CONTENT")
        self.reason = reason


class PayloadTooLargeError(ValidationError):
    """Raised when the aggregate length of user text exceeds the route cap."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            "Message too long",
            code="PAYLOAD_TOO_LARGE",
            details={"length": length, "limit": limit},
        )


class UnknownRouteError(FolioError):
    """Raised when the guard is asked about a route it has no policy for."""

    def __init__(self, route: str):
        super().__init__(
            f"No admission policy configured for route: {route}",
            code="UNKNOWN_ROUTE",
            details={"route": route},
        )
