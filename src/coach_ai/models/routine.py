"""Workout routine data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Difficulty(str, Enum):
    """Difficulty as returned by the routine generation tool."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def stored_value(self) -> str:
        """Spanish value persisted in ``workout_routines.difficulty_level``."""
        return DIFFICULTY_STORED[self]


DIFFICULTY_STORED: Dict[Difficulty, str] = {
    Difficulty.BEGINNER: "principiante",
    Difficulty.INTERMEDIATE: "intermedio",
    Difficulty.ADVANCED: "avanzado",
}


def stored_difficulty(value: Optional[str]) -> Optional[str]:
    """Map a tool difficulty to its stored form, passing unknown values through."""
    if value is None:
        return None
    try:
        return Difficulty(value).stored_value
    except ValueError:
        return value


@dataclass
class RoutineExercise:
    """One ordered exercise of a routine."""
    name: str
    sets: int
    reps: str
    rest_seconds: int
    order_index: int = 0
    weight_suggestion: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    routine_id: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "routine_id": self.routine_id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight_suggestion": self.weight_suggestion,
            "rest_seconds": self.rest_seconds,
            "notes": self.notes,
            "order_index": self.order_index,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineExercise":
        return cls(
            id=data.get("id"),
            routine_id=data.get("routine_id"),
            name=data["name"],
            sets=int(data.get("sets") or 1),
            reps=str(data.get("reps") or ""),
            weight_suggestion=data.get("weight_suggestion"),
            rest_seconds=int(data.get("rest_seconds") or 0),
            notes=data.get("notes"),
            order_index=int(data.get("order_index") or 0),
            created_at=data.get("created_at"),
        )


@dataclass
class WorkoutRoutine:
    """A user's routine and its exercises ordered by ``order_index``."""
    user_id: str
    name: str
    description: Optional[str] = None
    target_muscle_groups: List[str] = field(default_factory=list)
    estimated_duration_minutes: Optional[int] = None
    difficulty_level: Optional[str] = None
    generated_by_ai: bool = False
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    exercises: List[RoutineExercise] = field(default_factory=list)

    def row(self) -> Dict[str, Any]:
        """Columns of ``workout_routines`` (exercises excluded)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "target_muscle_groups": list(self.target_muscle_groups),
            "estimated_duration_minutes": self.estimated_duration_minutes,
            "difficulty_level": self.difficulty_level,
            "generated_by_ai": self.generated_by_ai,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.row()
        data["routine_exercises"] = [e.to_dict() for e in self.exercises]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutRoutine":
        exercises = [
            RoutineExercise.from_dict(e) for e in data.get("routine_exercises") or []
        ]
        exercises.sort(key=lambda e: e.order_index)
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            description=data.get("description"),
            target_muscle_groups=list(data.get("target_muscle_groups") or []),
            estimated_duration_minutes=data.get("estimated_duration_minutes"),
            difficulty_level=data.get("difficulty_level"),
            generated_by_ai=bool(data.get("generated_by_ai")),
            is_active=bool(data.get("is_active")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            exercises=exercises,
        )
