"""Supabase/PostgreSQL database adapter implementation.

Uses the PostgREST query builder of supabase-py. The backend authenticates
with the service role key, which bypasses Row-Level Security, so every query
issued by the repositories filters by ``user_id`` explicitly.

Environment Variables:
    SUPABASE_URL          - Project URL (https://xxx.supabase.co)
    SUPABASE_SERVICE_KEY  - Service role key for backend
"""

import os
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from supabase import Client, create_client

from . import DatabaseAdapter, Row


# Columns PostgreSQL fills itself when omitted
GENERATED_COLUMNS = {"id", "created_at", "updated_at"}


class SupabaseAdapter(DatabaseAdapter):
    """Supabase/PostgreSQL implementation of the DatabaseAdapter interface.

    Usage:
        adapter = SupabaseAdapter()  # from environment
        adapter = SupabaseAdapter(url="https://xxx.supabase.co", key="service-key")
    """

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        """Initialize Supabase adapter.

        Args:
            url: Supabase project URL. Defaults to SUPABASE_URL.
            key: Service role key. Defaults to SUPABASE_SERVICE_KEY.
            client: Pre-built client (tests).

        Raises:
            ValueError: If URL or key are missing and no client was given.
        """
        self._client = client
        if client is not None:
            return

        self.url = url or os.environ.get("SUPABASE_URL")
        if not self.url:
            raise ValueError(
                "Supabase URL not provided. Set SUPABASE_URL environment variable "
                "or pass url parameter."
            )
        self.key = key or os.environ.get("SUPABASE_SERVICE_KEY")
        if not self.key:
            raise ValueError(
                "Supabase API key not provided. Set SUPABASE_SERVICE_KEY "
                "environment variable or pass key parameter."
            )

    @property
    def client(self) -> Client:
        """Lazy-initialize Supabase client."""
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    def initialize(self) -> None:
        """Verify the connection.

        Schema is managed with Supabase migrations, not created here.
        """
        try:
            self.client.table("profiles").select("id").limit(1).execute()
        except Exception as e:
            raise ConnectionError(f"Failed to connect to Supabase: {e}") from e

    def close(self) -> None:
        self._client = None

    @staticmethod
    def _apply_filters(query, filters: Optional[Dict[str, Any]]):
        for column, value in (filters or {}).items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        return query

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
        query = self._apply_filters(self.client.table(table).select("*"), filters)
        for column in not_null:
            query = query.not_.is_(column, "null")
        if since:
            query = query.gte(since[0], since[1])
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        return list(query.execute().data or [])

    def insert(self, table: str, rows: List[Row]) -> List[Row]:
        if not rows:
            return []
        # Unset values fall back to PostgreSQL column defaults
        payload = [{k: v for k, v in row.items() if v is not None} for row in rows]
        result = self.client.table(table).insert(payload).execute()
        return list(result.data or [])

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        query = self._apply_filters(self.client.table(table).update(values), filters)
        return list(query.execute().data or [])

    def upsert(self, table: str, row: Row, on_conflict: str) -> Row:
        payload = {
            k: v for k, v in row.items()
            if not (k in GENERATED_COLUMNS and v is None)
        }
        result = self.client.table(table).upsert(payload, on_conflict=on_conflict).execute()
        return result.data[0]

    def health_check(self) -> Dict[str, Any]:
        start = time.time()
        try:
            self.client.table("profiles").select("id").limit(1).execute()
            return {
                "healthy": True,
                "backend": "postgresql",
                "version": "supabase",
                "latency_ms": round((time.time() - start) * 1000, 2),
            }
        except Exception as e:
            return {
                "healthy": False,
                "backend": "postgresql",
                "error": str(e),
            }
