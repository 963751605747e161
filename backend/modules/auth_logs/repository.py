"""
Database-backed auth event log.

Stores events in the ``auth_logs`` table (see
``migrations/001_create_auth_logs.sql``) through the service-role Supabase
client. Every call is a single PostgREST round trip bounded by the client
timeout; failures are logged and degrade to an empty result.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from shared.repository import BaseRepository

from .base import RECENT_ACTIVITY_SIZE, AuthEventLogBase
from .models import AuthEvent, AuthEventCreate, AuthEventType, AuthLogFilter, AuthLogStats

logger = logging.getLogger(__name__)

TABLE = "auth_logs"
STATS_FUNCTION = "auth_log_stats"

_COLUMNS = "id, user_id, user_email, user_name, event, ip_address, user_agent, metadata, created_at"


class SupabaseAuthEventLog(BaseRepository[AuthEvent], AuthEventLogBase):
    """
    Durable implementation of IAuthEventLog.

    No truncation happens on insert; retention is handled by ``purge``.
    """

    table = TABLE

    async def record(self, event: AuthEventCreate) -> Optional[AuthEvent]:
        row = {
            "user_id": event.user_id,
            "user_email": event.user_email,
            "user_name": event.user_name,
            "event": event.event.value,
            "ip_address": event.ip_address,
            "user_agent": event.user_agent,
            "metadata": event.metadata,
        }
        try:
            result = self._table().insert(row).execute()
            inserted = self._first_row(result.data)
            stored = self._map_row(inserted) if inserted else None
        except Exception:
            logger.exception(f"[AUTH LOG ERROR] Failed to store {event.event.value} event, dropping it")
            self._log_recorded(event)
            return None

        self._log_recorded(event)
        return stored

    async def query(self, filter: AuthLogFilter, limit: int = 100) -> list[AuthEvent]:
        try:
            query = self._table().select(_COLUMNS)
            if filter.user_id is not None:
                query = query.eq("user_id", filter.user_id)
            elif filter.event is not None:
                query = query.eq("event", filter.event.value)

            result = query.order("created_at", desc=True).limit(max(limit, 0)).execute()
            return [self._map_row(row) for row in result.data]
        except Exception:
            logger.exception("[AUTH LOG ERROR] Failed to query auth logs")
            return []

    async def stats(self) -> AuthLogStats:
        try:
            result = self._db.rpc(STATS_FUNCTION, {}).execute()
            data = self._first_row(result.data) or {}
        except Exception:
            logger.exception("[AUTH LOG ERROR] Failed to load auth log statistics")
            return AuthLogStats()

        return AuthLogStats(
            total_logs=int(data.get("total_logs") or 0),
            event_counts={k: int(v) for k, v in (data.get("event_counts") or {}).items()},
            unique_users=int(data.get("unique_users") or 0),
            recent_activity=await self.query(AuthLogFilter(), RECENT_ACTIVITY_SIZE),
        )

    async def purge(self, max_age_days: int = 30) -> int:
        cutoff = datetime.now(timezone.utc) - timedelta(days=max_age_days)
        try:
            result = self._table().delete().lt("created_at", cutoff.isoformat()).execute()
        except Exception:
            logger.exception("[AUTH LOG ERROR] Failed to purge old auth logs")
            return 0

        removed = len(result.data or [])
        logger.info(f"[AUTH LOG] Purged {removed} event(s) older than {max_age_days} days")
        return removed

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_row(self, row: dict[str, Any]) -> AuthEvent:
        return AuthEvent(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            user_email=row.get("user_email"),
            user_name=row.get("user_name"),
            event=AuthEventType(row["event"]),
            ip_address=row.get("ip_address") or "unknown",
            user_agent=row.get("user_agent") or "unknown",
            metadata=row.get("metadata"),
            timestamp=row["created_at"],
        )
