"""
Auth logs module interface.

Both storage backends implement IAuthEventLog; which one runs is decided by
configuration (see ``service.create_auth_event_log``), so callers never
know whether events live in memory or in the database.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AuthEvent, AuthEventCreate, AuthLogFilter, AuthLogStats


@runtime_checkable
class IAuthEventLog(Protocol):
    """
    Interface for the authentication event log.

    Writes are best-effort: storage failures are logged and swallowed so
    that logging never fails the request that triggered it.
    """

    async def record(self, event: AuthEventCreate) -> Optional[AuthEvent]:
        """
        Store one event, assigning its ID and timestamp.

        Returns:
            The stored AuthEvent, or None if the write failed
        """
        ...

    async def query(self, filter: AuthLogFilter, limit: int = 100) -> list[AuthEvent]:
        """
        Return at most ``limit`` events matching ``filter``, newest first.
        """
        ...

    async def stats(self) -> AuthLogStats:
        """
        Aggregate counts over the full log plus the 10 newest events.
        """
        ...

    async def purge(self, max_age_days: int = 30) -> int:
        """
        Delete events older than ``max_age_days``.

        Returns:
            Number of events removed
        """
        ...
