"""
Auth logs module.

Append-only log of authentication lifecycle events with aggregate
statistics. Two interchangeable backends implement IAuthEventLog:
an in-memory ring buffer and the ``auth_logs`` database table.

Public API:
- IAuthEventLog: Interface for the log
- create_auth_event_log: Backend factory driven by AUTH_LOG_BACKEND
- AuthTrackingService: Guarded recording of client-reported events
- log_sign_in / log_sign_out / log_sign_up / log_failed_auth: Recorders
"""

from .interfaces import IAuthEventLog
from .models import (
    AuthEvent,
    AuthEventCreate,
    AuthEventType,
    AuthLogFilter,
    AuthLogStats,
    AuthLogsResponse,
    PurgeResponse,
    TrackEventRequest,
    TrackEventResponse,
)
from .exceptions import AuthLogError, InvalidRetentionError, UnknownAuthLogBackendError
from .memory import InMemoryAuthEventLog
from .repository import SupabaseAuthEventLog
from .service import (
    AuthTrackingService,
    create_auth_event_log,
    log_failed_auth,
    log_sign_in,
    log_sign_out,
    log_sign_up,
    purge_old_events,
)

__all__ = [
    # Interface
    "IAuthEventLog",
    # Models
    "AuthEvent",
    "AuthEventCreate",
    "AuthEventType",
    "AuthLogFilter",
    "AuthLogStats",
    "AuthLogsResponse",
    "PurgeResponse",
    "TrackEventRequest",
    "TrackEventResponse",
    # Exceptions
    "AuthLogError",
    "InvalidRetentionError",
    "UnknownAuthLogBackendError",
    # Backends
    "InMemoryAuthEventLog",
    "SupabaseAuthEventLog",
    # Service
    "AuthTrackingService",
    "create_auth_event_log",
    "log_failed_auth",
    "log_sign_in",
    "log_sign_out",
    "log_sign_up",
    "purge_old_events",
]
