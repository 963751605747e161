"""
Base repository class for database access.

Wraps the service-role Supabase client and the few PostgREST response
shapes repositories have to normalize.
"""

from typing import Any, ClassVar, Generic, Optional, TypeVar

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase-backed repositories.

    Subclasses set ``table`` and map rows to their Pydantic model.

    Example:
        class AuthLogRepository(BaseRepository[AuthEvent]):
            table = "auth_logs"

            def latest(self) -> Optional[AuthEvent]:
                result = self._table().select("*").limit(1).execute()
                row = self._first_row(result.data)
                return self._map_row(row) if row else None
    """

    table: ClassVar[str] = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _table(self):
        """Query builder for this repository's table."""
        if not self.table:
            raise RuntimeError(f"{type(self).__name__} does not declare a table")
        return self._db.table(self.table)

    @staticmethod
    def _first_row(data: Any) -> Optional[dict[str, Any]]:
        """
        Return the first row of a PostgREST payload.

        Inserts and table reads return a list of rows; scalar RPC calls may
        return a bare object. Empty payloads give None.
        """
        if isinstance(data, list):
            return data[0] if data else None
        return data or None
