"""
Auth logs service layer.

Selects the storage backend from configuration, records client-reported
auth events through the admission guard, and offers one-line recorders for
the common lifecycle events.
"""

import logging
from typing import Any, Optional

from modules.security import ROUTE_AUTH_TRACK, IAdmissionGuard, sanitize_text
from shared.config import Settings, get_settings
from shared.database import get_supabase_client
from shared.models import AuthenticatedUser, RequestContext

from .exceptions import InvalidRetentionError, UnknownAuthLogBackendError
from .interfaces import IAuthEventLog
from .memory import InMemoryAuthEventLog
from .models import AuthEvent, AuthEventCreate, AuthEventType, TrackEventRequest
from .repository import SupabaseAuthEventLog

logger = logging.getLogger(__name__)

MAX_TRACKED_FIELD_LENGTH = 500


def create_auth_event_log(settings: Optional[Settings] = None) -> IAuthEventLog:
    """
    Build the auth event log selected by ``AUTH_LOG_BACKEND``.

    Raises:
        UnknownAuthLogBackendError: For an unrecognized backend name
    """
    settings = settings or get_settings()
    backend = settings.auth_log_backend

    if backend == "memory":
        logger.info(f"Auth event log: in-memory (max {settings.auth_log_max_entries} entries)")
        return InMemoryAuthEventLog(max_entries=settings.auth_log_max_entries)
    if backend == "database":
        logger.info("Auth event log: database (auth_logs table)")
        return SupabaseAuthEventLog(get_supabase_client())

    raise UnknownAuthLogBackendError(backend)


async def purge_old_events(log: IAuthEventLog, max_age_days: int) -> int:
    """
    Apply the retention policy.

    Raises:
        InvalidRetentionError: If ``max_age_days`` is below one
    """
    if max_age_days < 1:
        raise InvalidRetentionError(max_age_days)
    return await log.purge(max_age_days)


class AuthTrackingService:
    """
    Records auth events reported by the browser.

    The request passes the admission guard first; every free-text field is
    screened and stripped of markup before it is stored.
    """

    def __init__(self, guard: IAdmissionGuard, log: IAuthEventLog):
        self._guard = guard
        self._log = log

    async def track(
        self,
        ctx: RequestContext,
        request: TrackEventRequest,
        user: Optional[AuthenticatedUser] = None,
    ) -> Optional[AuthEvent]:
        """
        Admit, clean and record one tracked event.

        When the caller is authenticated, the identity from the token
        replaces whatever the body claims.
        """
        fields = {
            "user_id": user.id if user else request.user_id,
            "user_email": user.email if user and user.email else request.email,
            "user_name": user.name if user and user.name else request.user_name,
            "ip_address": request.ip_address or ctx.client_ip,
            "user_agent": request.user_agent or ctx.user_agent,
        }
        present = [name for name, value in fields.items() if value]

        async def record(sanitized: list[str]) -> Optional[AuthEvent]:
            cleaned = dict(zip(present, sanitized))
            email = cleaned.get("user_email")
            return await self._log.record(
                AuthEventCreate(
                    user_id=cleaned.get("user_id") or None,
                    user_email=email.lower() if email else None,
                    user_name=cleaned.get("user_name") or None,
                    event=request.type,
                    ip_address=cleaned.get("ip_address") or "unknown",
                    user_agent=cleaned.get("user_agent") or "unknown",
                )
            )

        return await self._guard.process(
            ctx,
            ROUTE_AUTH_TRACK,
            [fields[name] for name in present],
            record,
            sanitizer=_sanitize_tracked_field,
        )


def _sanitize_tracked_field(value: str) -> str:
    return sanitize_text(value)[:MAX_TRACKED_FIELD_LENGTH]


# -----------------------------------------------------------------------------
# Convenience recorders
# -----------------------------------------------------------------------------


async def log_sign_in(
    log: IAuthEventLog,
    user_id: str,
    user_email: Optional[str],
    user_name: Optional[str],
    ip_address: str,
    user_agent: str,
) -> Optional[AuthEvent]:
    return await log.record(
        AuthEventCreate(
            user_id=user_id,
            user_email=user_email,
            user_name=user_name,
            event=AuthEventType.SIGN_IN,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    )


async def log_sign_out(
    log: IAuthEventLog,
    user_id: str,
    user_email: Optional[str],
    user_name: Optional[str],
    ip_address: str,
    user_agent: str,
) -> Optional[AuthEvent]:
    return await log.record(
        AuthEventCreate(
            user_id=user_id,
            user_email=user_email,
            user_name=user_name,
            event=AuthEventType.SIGN_OUT,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    )


async def log_sign_up(
    log: IAuthEventLog,
    user_id: str,
    user_email: Optional[str],
    user_name: Optional[str],
    ip_address: str,
    user_agent: str,
    metadata: Optional[dict[str, Any]] = None,
) -> Optional[AuthEvent]:
    return await log.record(
        AuthEventCreate(
            user_id=user_id,
            user_email=user_email,
            user_name=user_name,
            event=AuthEventType.SIGN_UP,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata,
        )
    )


async def log_failed_auth(
    log: IAuthEventLog,
    ip_address: str,
    user_agent: str,
    reason: Optional[str] = None,
) -> Optional[AuthEvent]:
    """Record an anonymous failed authentication attempt."""
    return await log.record(
        AuthEventCreate(
            event=AuthEventType.FAILED_AUTH,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata={"reason": reason} if reason else None,
        )
    )
