"""
Translation of identity-provider lifecycle events into auth events.
"""

from typing import Any, Optional

from modules.auth_logs.models import AuthEventCreate, AuthEventType

from .models import IdentityWebhookEvent

SESSION_CREATED_TYPES = frozenset({"session.created"})
SESSION_REVOKED_TYPES = frozenset({"session.ended", "session.removed", "session.revoked"})
USER_CREATED_TYPES = frozenset({"user.created"})


def _primary_email(data: dict[str, Any]) -> Optional[str]:
    addresses = data.get("email_addresses") or []
    if addresses and isinstance(addresses[0], dict):
        return addresses[0].get("email_address") or None
    return None


def _full_name(data: dict[str, Any]) -> Optional[str]:
    name = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()
    return name or None


def map_identity_event(
    event: IdentityWebhookEvent,
    ip_address: str,
    user_agent: str,
) -> Optional[AuthEventCreate]:
    """
    Map a lifecycle notification to the auth event it represents.

    Returns:
        The AuthEventCreate to record, or None for event types that are
        not tracked
    """
    data = event.data

    if event.type in SESSION_CREATED_TYPES or event.type in SESSION_REVOKED_TYPES:
        kind = (
            AuthEventType.SESSION_CREATED
            if event.type in SESSION_CREATED_TYPES
            else AuthEventType.SESSION_REVOKED
        )
        return AuthEventCreate(
            user_id=data.get("user_id"),
            event=kind,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata={"sessionId": data.get("id")},
        )

    if event.type in USER_CREATED_TYPES:
        return AuthEventCreate(
            user_id=data.get("id"),
            user_email=_primary_email(data),
            user_name=_full_name(data),
            event=AuthEventType.SIGN_UP,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    return None
