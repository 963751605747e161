"""
Security module.

Request admission for the public endpoints: input sanitization,
suspicious-pattern detection, fixed-window rate limiting and the security
event audit trail.

Public API:
- AdmissionGuard: Composes the checks below into one pipeline
- FixedWindowRateLimiter: Per-client, per-bucket request counter
- SuspiciousPatternDetector: Configurable heuristic rule set
- SecurityEventLog: Bounded audit trail of security incidents
- Sanitizer functions: sanitize_text, sanitize_chat_message, ...
- Security exceptions: RateLimitExceededError, SuspiciousContentError, etc.
"""

from .interfaces import IAdmissionGuard, IPatternDetector, IRateLimiter
from .models import (
    AdmissionOutcome,
    ContactForm,
    DetectionResult,
    RateLimitDecision,
    RateLimitRule,
    RoutePolicy,
    SecurityEvent,
    SecurityEventType,
)
from .exceptions import (
    InvalidContentTypeError,
    InvalidFormatError,
    InvalidOriginError,
    MethodNotAllowedError,
    PayloadTooLargeError,
    RateLimitExceededError,
    SuspiciousContentError,
    UnknownRouteError,
)
from .sanitizer import (
    escape_special_chars,
    sanitize_chat_message,
    sanitize_contact_form,
    sanitize_email,
    sanitize_html,
    sanitize_json,
    sanitize_text,
)
from .detector import DetectionRule, SuspiciousPatternDetector, detect_suspicious_patterns
from .rate_limiter import (
    BUCKET_AUTH_TRACK,
    BUCKET_CHAT,
    BUCKET_CONTACT,
    FixedWindowRateLimiter,
    InMemoryWindowStore,
    build_rate_limit_rules,
)
from .audit import SecurityEventLog
from .guard import (
    ROUTE_AUTH_TRACK,
    ROUTE_CHAT,
    ROUTE_CONTACT,
    AdmissionGuard,
    build_route_policies,
)

__all__ = [
    # Interfaces
    "IAdmissionGuard",
    "IPatternDetector",
    "IRateLimiter",
    # Models
    "AdmissionOutcome",
    "ContactForm",
    "DetectionResult",
    "RateLimitDecision",
    "RateLimitRule",
    "RoutePolicy",
    "SecurityEvent",
    "SecurityEventType",
    # Exceptions
    "InvalidContentTypeError",
    "InvalidFormatError",
    "InvalidOriginError",
    "MethodNotAllowedError",
    "PayloadTooLargeError",
    "RateLimitExceededError",
    "SuspiciousContentError",
    "UnknownRouteError",
    # Sanitizer
    "escape_special_chars",
    "sanitize_chat_message",
    "sanitize_contact_form",
    "sanitize_email",
    "sanitize_html",
    "sanitize_json",
    "sanitize_text",
    # Detector
    "DetectionRule",
    "SuspiciousPatternDetector",
    "detect_suspicious_patterns",
    # Rate limiting
    "BUCKET_AUTH_TRACK",
    "BUCKET_CHAT",
    "BUCKET_CONTACT",
    "FixedWindowRateLimiter",
    "InMemoryWindowStore",
    "build_rate_limit_rules",
    # Audit
    "SecurityEventLog",
    # Guard
    "ROUTE_AUTH_TRACK",
    "ROUTE_CHAT",
    "ROUTE_CONTACT",
    "AdmissionGuard",
    "build_route_policies",
]
