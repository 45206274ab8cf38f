"""Database adapters.

The app only ever needs generic row CRUD filtered by equality (the same
surface the hosted backend's REST API exposes), so the adapter interface is
table-oriented rather than entity-oriented. Repositories build on top.

Usage:
    # SQLite (development, tests)
    adapter = SQLiteAdapter(db_path="coach_ai.db")

    # Supabase/PostgreSQL (production)
    adapter = SupabaseAdapter(url=SUPABASE_URL, key=SUPABASE_SERVICE_KEY)

    rows = adapter.select("workout_routines", {"user_id": uid, "is_active": True})
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple


Row = Dict[str, Any]


class DatabaseAdapter(ABC):
    """Abstract base class for database adapters.

    Key differences between backends:

    SQLite:
        - TEXT ids generated client-side (uuid4)
        - JSON text for arrays / objects
        - INTEGER 0/1 for booleans

    PostgreSQL/Supabase:
        - UUID ids and timestamps defaulted by the database
        - text[] / jsonb columns
        - Row-Level Security; the backend uses the service key
    """

    @abstractmethod
    def initialize(self) -> None:
        """Create tables (SQLite) or verify connectivity (Supabase)."""

    @abstractmethod
    def close(self) -> None:
        """Release connections."""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        not_null: Sequence[str] = (),
        since: Optional[Tuple[str, str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Select rows.

        Args:
            table: Table name
            filters: Column equality filters
            not_null: Columns that must not be NULL
            since: ``(column, iso_timestamp)`` lower bound, inclusive
            order_by: Column to order by
            descending: Sort direction
            limit: Maximum number of rows

        Returns:
            Matching rows as dicts
        """

    @abstractmethod
    def insert(self, table: str, rows: List[Row]) -> List[Row]:
        """Insert rows and return them as stored (with generated ids)."""

    @abstractmethod
    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        """Update every row matching ``filters`` and return the updated rows."""

    @abstractmethod
    def upsert(self, table: str, row: Row, on_conflict: str) -> Row:
        """Insert or update a row keyed by the ``on_conflict`` column."""

    def select_one(
        self,
        table: str,
        filters: Dict[str, Any],
    ) -> Optional[Row]:
        """Return the first matching row, or None."""
        rows = self.select(table, filters, limit=1)
        return rows[0] if rows else None

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """Return ``{"healthy": bool, "backend": str, ...}``."""


from .sqlite_adapter import SQLiteAdapter
from .supabase_adapter import SupabaseAdapter

__all__ = [
    "DatabaseAdapter",
    "Row",
    "SQLiteAdapter",
    "SupabaseAdapter",
]
