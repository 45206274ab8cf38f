"""SQLite database adapter implementation.

SQLite-Specific Considerations:
    - TEXT ids generated here with uuid4
    - Timestamps stored as ISO-8601 UTC strings (lexically ordered)
    - JSON text for array / object columns, INTEGER 0/1 for booleans
    - Single-writer model (WAL for better concurrent reads)
"""

import json
import os
import sqlite3
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from . import DatabaseAdapter, Row
from ..schema import (
    BOOL_COLUMNS,
    CREATED_COLUMNS,
    JSON_COLUMNS,
    SCHEMA,
    TABLES,
    UPDATED_COLUMNS,
)


def get_default_db_path() -> Path:
    """Get the default database path."""
    env_path = os.environ.get("DATABASE_PATH")
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent.parent.parent / "coach_ai.db"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteAdapter(DatabaseAdapter):
    """SQLite implementation of the DatabaseAdapter interface.

    Usage:
        adapter = SQLiteAdapter()  # Uses default path
        adapter = SQLiteAdapter(db_path="custom.db")
        adapter.initialize()
    """

    def __init__(self, db_path: Optional[str] = None):
        """Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file.
                    If not provided, uses DATABASE_PATH env var or default.
        """
        self.db_path = Path(db_path) if db_path else get_default_db_path()
        self._columns: Dict[str, List[str]] = {}

    def initialize(self) -> None:
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)

    def close(self) -> None:
        self._columns.clear()

    @contextmanager
    def _get_connection(self):
        """Get a database connection with optimized settings."""
        conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # =========================================================================
    # Encoding helpers
    # =========================================================================

    def _table_columns(self, conn: sqlite3.Connection, table: str) -> List[str]:
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        if table not in self._columns:
            info = conn.execute(f"PRAGMA table_info({table})").fetchall()
            self._columns[table] = [row["name"] for row in info]
        return self._columns[table]

    def _check_columns(self, conn: sqlite3.Connection, table: str, columns) -> None:
        known = set(self._table_columns(conn, table))
        unknown = [c for c in columns if c not in known]
        if unknown:
            raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")

    def _encode(self, table: str, column: str, value: Any) -> Any:
        if value is None:
            return None
        if column in JSON_COLUMNS.get(table, ()):
            return json.dumps(value, ensure_ascii=False)
        if column in BOOL_COLUMNS.get(table, ()):
            return 1 if value else 0
        return value

    def _decode(self, table: str, row: sqlite3.Row) -> Row:
        data = dict(row)
        for column in JSON_COLUMNS.get(table, ()):
            if data.get(column) is not None:
                data[column] = json.loads(data[column])
        for column in BOOL_COLUMNS.get(table, ()):
            if column in data:
                data[column] = bool(data[column])
        return data

    def _where(
        self,
        table: str,
        filters: Optional[Dict[str, Any]],
        not_null: Sequence[str] = (),
        since: Optional[Tuple[str, str]] = None,
    ) -> Tuple[str, List[Any]]:
        clauses: List[str] = []
        params: List[Any] = []
        for column, value in (filters or {}).items():
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(self._encode(table, column, value))
        for column in not_null:
            clauses.append(f"{column} IS NOT NULL")
        if since:
            clauses.append(f"{since[0]} >= ?")
            params.append(since[1])
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    # =========================================================================
    # CRUD
    # =========================================================================

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
        with self._get_connection() as conn:
            return self._select(conn, table, filters, not_null, since, order_by, descending, limit)

    def _select(
        self,
        conn: sqlite3.Connection,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        not_null: Sequence[str] = (),
        since: Optional[Tuple[str, str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        referenced = list((filters or {}).keys()) + list(not_null)
        if since:
            referenced.append(since[0])
        if order_by:
            referenced.append(order_by)
        self._check_columns(conn, table, referenced)

        where, params = self._where(table, filters, not_null, since)
        sql = f"SELECT * FROM {table}{where}"
        if order_by:
            sql += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        rows = conn.execute(sql, params).fetchall()
        return [self._decode(table, row) for row in rows]

    def _prepare_insert(self, table: str, row: Row) -> Row:
        now = utc_now_iso()
        prepared = dict(row)
        if not prepared.get("id"):
            prepared["id"] = str(uuid.uuid4())
        created_column = CREATED_COLUMNS[table]
        if not prepared.get(created_column):
            prepared[created_column] = now
        if table in UPDATED_COLUMNS and not prepared.get("updated_at"):
            prepared["updated_at"] = now
        return prepared

    def insert(self, table: str, rows: List[Row]) -> List[Row]:
        if not rows:
            return []
        inserted_ids: List[str] = []
        with self._get_connection() as conn:
            for row in rows:
                prepared = self._prepare_insert(table, row)
                columns = list(prepared.keys())
                self._check_columns(conn, table, columns)
                placeholders = ", ".join("?" for _ in columns)
                conn.execute(
                    f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                    [self._encode(table, c, prepared[c]) for c in columns],
                )
                inserted_ids.append(prepared["id"])
            return [self._select(conn, table, {"id": row_id})[0] for row_id in inserted_ids]

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        values = dict(values)
        if table in UPDATED_COLUMNS and "updated_at" not in values:
            values["updated_at"] = utc_now_iso()

        with self._get_connection() as conn:
            self._check_columns(conn, table, list(values.keys()))
            ids = [row["id"] for row in self._select(conn, table, filters)]
            if not ids:
                return []

            assignments = ", ".join(f"{column} = ?" for column in values)
            params = [self._encode(table, c, v) for c, v in values.items()]
            id_placeholders = ", ".join("?" for _ in ids)
            conn.execute(
                f"UPDATE {table} SET {assignments} WHERE id IN ({id_placeholders})",
                params + ids,
            )
            return [self._select(conn, table, {"id": row_id})[0] for row_id in ids]

    def upsert(self, table: str, row: Row, on_conflict: str) -> Row:
        prepared = self._prepare_insert(table, row)
        columns = list(prepared.keys())
        immutable = {"id", on_conflict, CREATED_COLUMNS[table]}
        updatable = [c for c in columns if c not in immutable]

        with self._get_connection() as conn:
            self._check_columns(conn, table, columns)
            placeholders = ", ".join("?" for _ in columns)
            sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
            if updatable:
                sql += f" ON CONFLICT({on_conflict}) DO UPDATE SET " + ", ".join(
                    f"{c} = excluded.{c}" for c in updatable
                )
            else:
                sql += f" ON CONFLICT({on_conflict}) DO NOTHING"
            conn.execute(sql, [self._encode(table, c, prepared[c]) for c in columns])
            return self._select(conn, table, {on_conflict: prepared[on_conflict]})[0]

    def health_check(self) -> Dict[str, Any]:
        start = time.time()
        try:
            with self._get_connection() as conn:
                version = conn.execute("SELECT sqlite_version()").fetchone()[0]
            return {
                "healthy": True,
                "backend": "sqlite",
                "version": version,
                "latency_ms": round((time.time() - start) * 1000, 2),
                "details": {"path": str(self.db_path)},
            }
        except sqlite3.Error as e:
            return {
                "healthy": False,
                "backend": "sqlite",
                "error": str(e),
            }
