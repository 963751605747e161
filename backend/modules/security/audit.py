"""
Security event log.

Keeps a bounded, newest-first audit trail of admission rejections and other
security incidents in memory, and mirrors every entry to the application
log at WARNING level.
"""

import itertools
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any, Optional

from .models import SecurityEvent, SecurityEventType

logger = logging.getLogger(__name__)


class SecurityEventLog:
    """
    Bounded in-memory log of security events.

    Instances are created once per process by the service container.
    """

    def __init__(self, max_entries: int = 1000):
        self._events: deque[SecurityEvent] = deque(maxlen=max_entries)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def record(
        self,
        event_type: SecurityEventType,
        ip_address: str,
        endpoint: str,
        reason: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> SecurityEvent:
        """Append an event and emit it to the application log."""
        with self._lock:
            event = SecurityEvent(
                id=f"sec_{next(self._ids)}",
                type=event_type,
                ip_address=ip_address,
                endpoint=endpoint,
                reason=reason,
                timestamp=datetime.now(timezone.utc),
                metadata=metadata,
            )
            self._events.appendleft(event)

        logger.warning(
            f"[SECURITY] {event_type.value} ip={ip_address} endpoint={endpoint} reason={reason}"
        )
        return event

    def get_events(
        self,
        limit: int = 100,
        event_type: Optional[SecurityEventType] = None,
    ) -> list[SecurityEvent]:
        """Return up to ``limit`` events, newest first, optionally of one type."""
        with self._lock:
            events = list(self._events)
        if event_type is not None:
            events = [e for e in events if e.type == event_type]
        return events[:limit]

    def __len__(self) -> int:
        return len(self._events)

    # Convenience recorders

    def log_rate_limit_exceeded(self, ip_address: str, endpoint: str, bucket: str) -> SecurityEvent:
        return self.record(
            SecurityEventType.RATE_LIMIT_EXCEEDED,
            ip_address,
            endpoint,
            f"Rate limit exceeded for bucket '{bucket}'",
            {"bucket": bucket},
        )

    def log_suspicious_input(self, ip_address: str, endpoint: str, reason: str) -> SecurityEvent:
        return self.record(SecurityEventType.SUSPICIOUS_INPUT, ip_address, endpoint, reason)

    def log_api_abuse(self, ip_address: str, endpoint: str, reason: str) -> SecurityEvent:
        return self.record(SecurityEventType.API_ABUSE, ip_address, endpoint, reason)

    def log_unauthorized_access(self, ip_address: str, endpoint: str, reason: str) -> SecurityEvent:
        return self.record(SecurityEventType.UNAUTHORIZED_ACCESS, ip_address, endpoint, reason)

    def log_failed_auth(self, ip_address: str, endpoint: str, reason: str) -> SecurityEvent:
        return self.record(SecurityEventType.FAILED_AUTH, ip_address, endpoint, reason)
