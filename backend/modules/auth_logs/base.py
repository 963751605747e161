"""
Shared behaviour for auth event log backends.

Backends implement the four storage operations; the convenience readers and
the application-log mirror of each recorded event live here once.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .models import AuthEvent, AuthEventCreate, AuthEventType, AuthLogFilter, AuthLogStats

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_SIZE = 10


class AuthEventLogBase(ABC):
    """Abstract base class for IAuthEventLog implementations."""

    @abstractmethod
    async def record(self, event: AuthEventCreate) -> Optional[AuthEvent]:
        pass

    @abstractmethod
    async def query(self, filter: AuthLogFilter, limit: int = 100) -> list[AuthEvent]:
        pass

    @abstractmethod
    async def stats(self) -> AuthLogStats:
        pass

    @abstractmethod
    async def purge(self, max_age_days: int = 30) -> int:
        pass

    async def get_all_logs(self, limit: int = 100) -> list[AuthEvent]:
        return await self.query(AuthLogFilter(), limit)

    async def get_logs_by_user(self, user_id: str, limit: int = 50) -> list[AuthEvent]:
        return await self.query(AuthLogFilter(user_id=user_id), limit)

    async def get_logs_by_event(self, event: AuthEventType, limit: int = 50) -> list[AuthEvent]:
        return await self.query(AuthLogFilter(event=event), limit)

    async def get_recent_sign_ins(self, limit: int = 20) -> list[AuthEvent]:
        return await self.get_logs_by_event(AuthEventType.SIGN_IN, limit)

    async def get_failed_attempts(self, limit: int = 20) -> list[AuthEvent]:
        return await self.get_logs_by_event(AuthEventType.FAILED_AUTH, limit)

    @staticmethod
    def _log_recorded(event: AuthEventCreate) -> None:
        """Mirror a stored event to the application log."""
        level = logging.WARNING if event.event == AuthEventType.FAILED_AUTH else logging.INFO
        subject = event.user_email or event.user_id or "anonymous"
        logger.log(level, f"[AUTH LOG] {event.event.value} user={subject} ip={event.ip_address}")
