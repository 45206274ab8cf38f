"""Tests for the SQLite adapter: schema, encoding and generic CRUD."""

import pytest

from coach_ai.db.adapters import SQLiteAdapter
from coach_ai.db.schema import TABLES


class TestInitialize:

    def test_creates_all_tables(self, adapter):
        with adapter._get_connection() as conn:
            names = {
                row["name"]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
            }
        assert set(TABLES) <= names

    def test_initialize_is_idempotent(self, adapter):
        adapter.initialize()
        assert adapter.health_check()["healthy"] is True

    def test_health_check(self, adapter, temp_db_path):
        health = adapter.health_check()
        assert health["backend"] == "sqlite"
        assert health["details"]["path"] == temp_db_path


class TestInsertSelect:

    def test_insert_generates_id_and_timestamps(self, adapter):
        row = adapter.insert("profiles", [{"user_id": "u1", "full_name": "Ana"}])[0]
        assert row["id"]
        assert row["created_at"]
        assert row["updated_at"]
        assert row["full_name"] == "Ana"

    def test_json_and_bool_columns_round_trip(self, adapter):
        row = adapter.insert(
            "workout_routines",
            [{
                "user_id": "u1",
                "name": "Pierna",
                "target_muscle_groups": ["cuádriceps", "glúteos"],
                "is_active": True,
                "generated_by_ai": False,
            }],
        )[0]
        assert row["target_muscle_groups"] == ["cuádriceps", "glúteos"]
        assert row["is_active"] is True
        assert row["generated_by_ai"] is False

    def test_filters_on_bool_column(self, adapter):
        adapter.insert("workout_routines", [
            {"user_id": "u1", "name": "A", "is_active": True},
            {"user_id": "u1", "name": "B", "is_active": False},
        ])
        rows = adapter.select("workout_routines", {"user_id": "u1", "is_active": True})
        assert [r["name"] for r in rows] == ["A"]

    def test_order_and_limit(self, adapter):
        adapter.insert("workout_routines", [
            {"user_id": "u1", "name": "A", "created_at": "2024-01-01T00:00:00+00:00"},
            {"user_id": "u1", "name": "B", "created_at": "2024-03-01T00:00:00+00:00"},
            {"user_id": "u1", "name": "C", "created_at": "2024-02-01T00:00:00+00:00"},
        ])
        rows = adapter.select("workout_routines", {"user_id": "u1"}, order_by="created_at", descending=True, limit=2)
        assert [r["name"] for r in rows] == ["B", "C"]

    def test_not_null_and_since(self, adapter):
        adapter.insert("workout_sessions", [
            {"user_id": "u1", "completed_at": None},
            {"user_id": "u1", "completed_at": "2024-05-01T10:00:00+00:00"},
            {"user_id": "u1", "completed_at": "2024-05-10T10:00:00+00:00"},
        ])
        rows = adapter.select(
            "workout_sessions",
            {"user_id": "u1"},
            not_null=("completed_at",),
            since=("completed_at", "2024-05-05T00:00:00+00:00"),
        )
        assert len(rows) == 1
        assert rows[0]["completed_at"] == "2024-05-10T10:00:00+00:00"

    def test_insert_empty_list(self, adapter):
        assert adapter.insert("profiles", []) == []

    def test_select_one_missing(self, adapter):
        assert adapter.select_one("profiles", {"user_id": "nobody"}) is None


class TestValidation:

    def test_unknown_table(self, adapter):
        with pytest.raises(ValueError, match="Unknown table"):
            adapter.select("users")

    def test_unknown_column(self, adapter):
        with pytest.raises(ValueError, match="Unknown column"):
            adapter.insert("profiles", [{"user_id": "u1", "password": "x"}])


class TestUpdateUpsert:

    def test_update_returns_updated_rows(self, adapter):
        adapter.insert("workout_routines", [
            {"user_id": "u1", "name": "A", "is_active": True},
            {"user_id": "u1", "name": "B", "is_active": True},
            {"user_id": "u2", "name": "C", "is_active": True},
        ])
        rows = adapter.update("workout_routines", {"is_active": False}, {"user_id": "u1", "is_active": True})
        assert len(rows) == 2
        assert all(r["is_active"] is False for r in rows)
        assert adapter.select("workout_routines", {"user_id": "u2"})[0]["is_active"] is True

    def test_update_without_matches(self, adapter):
        assert adapter.update("profiles", {"full_name": "X"}, {"user_id": "nobody"}) == []

    def test_upsert_inserts_then_updates(self, adapter):
        first = adapter.upsert(
            "user_notifications",
            {"user_id": "u1", "preferred_training_time": "07:00"},
            on_conflict="user_id",
        )
        second = adapter.upsert(
            "user_notifications",
            {"user_id": "u1", "notifications_enabled": True},
            on_conflict="user_id",
        )
        assert second["id"] == first["id"]
        assert second["preferred_training_time"] == "07:00"
        assert second["notifications_enabled"] is True

    def test_upsert_defaults_training_days(self, adapter):
        row = adapter.upsert("user_notifications", {"user_id": "u1"}, on_conflict="user_id")
        assert row["training_days"] == ["lunes", "miércoles", "viernes"]
        assert row["preferred_training_time"] == "18:00"


def test_default_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "env.db"))
    assert SQLiteAdapter().db_path == tmp_path / "env.db"
