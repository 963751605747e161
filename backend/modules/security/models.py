"""
Security module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class DetectionResult(BaseModel):
    """Outcome of scanning a piece of text for suspicious patterns."""

    is_suspicious: bool = Field(..., description="Whether any rule matched")
    reason: Optional[str] = Field(None, description="Category and rule that matched")

    model_config = {"frozen": True}


class RateLimitRule(BaseModel):
    """Fixed-window budget for one bucket."""

    requests: int = Field(..., ge=1, description="Requests allowed per window")
    window_seconds: int = Field(..., ge=1, description="Window length in seconds")

    model_config = {"frozen": True}


class RateLimitDecision(BaseModel):
    """Result of a single rate limiter admission check."""

    allowed: bool
    retry_after: int = Field(default=0, description="Seconds until the window resets")
    limit: int = Field(default=0, description="Requests allowed per window (0 = unlimited)")
    remaining: int = Field(default=0, description="Requests left in the current window")

    model_config = {"frozen": True}


class AdmissionOutcome(str, Enum):
    """Terminal outcomes of the admission pipeline."""

    ACCEPTED = "accepted"
    REJECTED_BY_METHOD = "rejected_by_method"
    REJECTED_BY_ORIGIN = "rejected_by_origin"
    REJECTED_BY_CONTENT_TYPE = "rejected_by_content_type"
    REJECTED_BY_RATE_LIMIT = "rejected_by_rate_limit"
    REJECTED_BY_SUSPICIOUS_CONTENT = "rejected_by_suspicious_content"
    REJECTED_BY_LENGTH = "rejected_by_length"


class RoutePolicy(BaseModel):
    """Admission policy for one guarded route."""

    bucket: str = Field(..., description="Rate limiter bucket name")
    allowed_methods: frozenset[str] = Field(default=frozenset({"POST"}))
    allowed_content_types: frozenset[str] = Field(
        default=frozenset({"application/json"}),
        description="Accepted media types; empty disables the check",
    )
    max_total_length: Optional[int] = Field(
        None,
        description="Aggregate character cap over all guarded text",
    )

    model_config = {"frozen": True}


class SecurityEventType(str, Enum):
    """Kinds of entries in the security event log."""

    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SUSPICIOUS_INPUT = "suspicious_input"
    API_ABUSE = "api_abuse"
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    FAILED_AUTH = "failed_auth"


class SecurityEvent(BaseModel):
    """An audit record of a security-relevant incident."""

    id: str
    type: SecurityEventType
    ip_address: str
    endpoint: str
    reason: str
    timestamp: datetime
    metadata: Optional[dict[str, Any]] = None


class ContactForm(BaseModel):
    """Contact form submission, before or after sanitization."""

    name: str
    email: str
    message: str
