"""Shared fixtures: temporary SQLite database, repositories and settings."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from coach_ai.config import Settings
from coach_ai.db.adapters import SQLiteAdapter
from coach_ai.db.repositories import (
    NotificationRepository,
    ProfileRepository,
    RoutineRepository,
    SessionRepository,
)
from coach_ai.models.routine import RoutineExercise, WorkoutRoutine

USER_ID = "user-123"
JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"
SERVICE_KEY = "test-service-role-key"


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    for suffix in ("", "-wal", "-shm"):
        try:
            os.unlink(db_path + suffix)
        except OSError:
            pass


@pytest.fixture
def adapter(temp_db_path):
    """Initialized SQLite adapter on a temporary file."""
    adapter = SQLiteAdapter(db_path=temp_db_path)
    adapter.initialize()
    yield adapter
    adapter.close()


@pytest.fixture
def profiles(adapter):
    return ProfileRepository(adapter)


@pytest.fixture
def routines(adapter):
    return RoutineRepository(adapter)


@pytest.fixture
def sessions(adapter):
    return SessionRepository(adapter)


@pytest.fixture
def notifications(adapter):
    return NotificationRepository(adapter)


@pytest.fixture
def settings(temp_db_path):
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        database_backend="sqlite",
        database_path=temp_db_path,
        ai_gateway_api_key="test-gateway-key",
        supabase_jwt_secret=JWT_SECRET,
        supabase_service_key=SERVICE_KEY,
        elevenlabs_api_key="test-elevenlabs-key",
        elevenlabs_base_url="https://api.elevenlabs.test/v1",
        functions_base_url="http://coach.test/functions/v1",
        cli_user_id=USER_ID,
    )


@pytest.fixture
def sample_profile(profiles):
    profile = profiles.create(USER_ID, "Ana García")
    return profiles.update(
        USER_ID,
        goal="build_muscle",
        experience_level="intermediate",
        weight_kg=70.0,
        streak_days=4,
        total_xp=300,
    ) or profile


@pytest.fixture
def sample_routine(routines):
    """Active routine with three exercises."""
    routine = WorkoutRoutine(
        user_id=USER_ID,
        name="Torso fuerza",
        description="Empuje y tirón",
        target_muscle_groups=["pecho", "espalda"],
        estimated_duration_minutes=45,
        difficulty_level="intermedio",
        generated_by_ai=True,
    )
    exercises = [
        RoutineExercise(name="Press banca", sets=3, reps="8-10", rest_seconds=90, weight_suggestion="60kg"),
        RoutineExercise(name="Remo con barra", sets=3, reps="10", rest_seconds=60, weight_suggestion="50-55 kg"),
        RoutineExercise(name="Plancha", sets=2, reps="30s", rest_seconds=0),
    ]
    return routines.create(routine, exercises)


def complete_session_at(sessions, when: datetime, duration_seconds: int = 1800, xp: int = 80):
    """Insert a completed session finished at ``when``."""
    session = sessions.start(USER_ID)
    return sessions.complete(session.id, duration_seconds, xp, completed_at=when)


def utc(year, month, day, hour=12, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def days_ago(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)
