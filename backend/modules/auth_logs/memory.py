"""
In-memory auth event log.

A bounded, newest-first buffer: once full, every insert drops the oldest
event. Contents are lost on restart, which makes this backend suitable for
development and single-instance deployments only.
"""

import itertools
import logging
import threading
from collections import Counter, deque
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .base import RECENT_ACTIVITY_SIZE, AuthEventLogBase
from .models import AuthEvent, AuthEventCreate, AuthLogFilter, AuthLogStats

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAuthEventLog(AuthEventLogBase):
    """
    Ring-buffer implementation of IAuthEventLog.

    One instance is created at application start-up and owned by the
    service container.
    """

    def __init__(self, max_entries: int = 500, clock: Callable[[], datetime] = _utcnow):
        self._max_entries = max_entries
        self._events: deque[AuthEvent] = deque(maxlen=max_entries)
        self._ids = itertools.count(1)
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    async def record(self, event: AuthEventCreate) -> Optional[AuthEvent]:
        try:
            with self._lock:
                stored = AuthEvent(
                    id=f"auth_{next(self._ids)}",
                    timestamp=self._clock(),
                    **event.model_dump(),
                )
                self._events.appendleft(stored)
        except Exception:
            logger.exception("Failed to record auth event in memory")
            return None

        self._log_recorded(stored)
        return stored

    async def query(self, filter: AuthLogFilter, limit: int = 100) -> list[AuthEvent]:
        events = self._snapshot()
        if filter.user_id is not None:
            events = [e for e in events if e.user_id == filter.user_id]
        elif filter.event is not None:
            events = [e for e in events if e.event == filter.event]
        return events[: max(limit, 0)]

    async def stats(self) -> AuthLogStats:
        events = self._snapshot()
        counts = Counter(e.event.value for e in events)
        return AuthLogStats(
            total_logs=len(events),
            event_counts=dict(counts),
            unique_users=len({e.user_id for e in events if e.user_id is not None}),
            recent_activity=events[:RECENT_ACTIVITY_SIZE],
        )

    async def purge(self, max_age_days: int = 30) -> int:
        cutoff = self._clock() - timedelta(days=max_age_days)
        with self._lock:
            kept = [e for e in self._events if e.timestamp >= cutoff]
            removed = len(self._events) - len(kept)
            self._events = deque(kept, maxlen=self._max_entries)

        if removed:
            logger.info(f"[AUTH LOG] Purged {removed} event(s) older than {max_age_days} days")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def _snapshot(self) -> list[AuthEvent]:
        with self._lock:
            return list(self._events)
