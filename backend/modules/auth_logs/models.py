"""
Auth logs module data models.

Events travel over HTTP in camelCase (``userId``, ``ipAddress``...) while
the Python side and the database use snake_case.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthEventType(str, Enum):
    """Closed set of authentication lifecycle events."""

    SIGN_IN = "sign_in"
    SIGN_OUT = "sign_out"
    SIGN_UP = "sign_up"
    FAILED_AUTH = "failed_auth"
    SESSION_CREATED = "session_created"
    SESSION_REVOKED = "session_revoked"


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthEventCreate(CamelModel):
    """An authentication event before it is stored."""

    user_id: Optional[str] = Field(None, description="Subject user ID")
    user_email: Optional[str] = Field(None, description="Subject email")
    user_name: Optional[str] = Field(None, description="Subject display name")
    event: AuthEventType = Field(..., description="Event kind")
    ip_address: str = Field(default="unknown", description="Origin IP address")
    user_agent: str = Field(default="unknown", description="Origin user agent")
    metadata: Optional[dict[str, Any]] = Field(None, description="Free-form JSON metadata")


class AuthEvent(AuthEventCreate):
    """A stored authentication event. Never mutated once recorded."""

    id: str = Field(..., description="Unique event ID")
    timestamp: datetime = Field(..., description="Creation time (UTC)")

    model_config = ConfigDict(frozen=True)


class AuthLogFilter(BaseModel):
    """
    Query filter for the auth event log.

    At most one criterion applies; ``user_id`` wins over ``event``.
    """

    user_id: Optional[str] = None
    event: Optional[AuthEventType] = None


class AuthLogStats(CamelModel):
    """Aggregate statistics over the whole log."""

    total_logs: int = 0
    event_counts: dict[str, int] = Field(default_factory=dict)
    unique_users: int = 0
    recent_activity: list[AuthEvent] = Field(default_factory=list)


class TrackEventRequest(CamelModel):
    """Body of ``POST /auth/track``, sent by the browser after auth changes."""

    type: AuthEventType
    user_id: Optional[str] = None
    email: Optional[str] = None
    user_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class TrackEventResponse(BaseModel):
    success: bool = True


class AuthLogsResponse(CamelModel):
    """Response of the admin log viewer."""

    logs: list[AuthEvent]
    stats: AuthLogStats
    count: int = Field(..., description="Number of logs returned")
    total: int = Field(..., description="Total number of logs stored")


class PurgeResponse(BaseModel):
    removed: int = Field(..., description="Number of events deleted")
