"""Workout session and completed-set models."""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp as stored by SQLite or PostgREST."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    # PostgREST returns a trailing Z on some deployments
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class WorkoutSession:
    """One row of ``workout_sessions``."""
    user_id: str
    routine_id: Optional[str] = None
    id: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    duration_seconds: Optional[int] = None
    xp_earned: Optional[int] = None
    notes: Optional[str] = None

    @property
    def completed_at_dt(self) -> Optional[datetime]:
        return parse_timestamp(self.completed_at)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutSession":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            routine_id=data.get("routine_id"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            duration_seconds=data.get("duration_seconds"),
            xp_earned=data.get("xp_earned"),
            notes=data.get("notes"),
        )


@dataclass
class CompletedSet:
    """Append-only log entry for one performed set."""
    session_id: str
    exercise_name: str
    set_number: int
    reps_completed: Optional[int] = None
    weight_used: Optional[str] = None
    id: Optional[str] = None
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletedSet":
        return cls(
            id=data.get("id"),
            session_id=data["session_id"],
            exercise_name=data["exercise_name"],
            set_number=data["set_number"],
            reps_completed=data.get("reps_completed"),
            weight_used=data.get("weight_used"),
            completed_at=data.get("completed_at"),
        )
