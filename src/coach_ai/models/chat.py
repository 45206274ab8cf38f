"""Chat coach models.

``UserContext`` is the snapshot the app sends alongside the conversation so
the coach can talk about the user's actual plan and recent training.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single conversation turn in OpenAI chat format."""

    role: Literal["user", "assistant", "system"]
    content: str


class ContextExercise(BaseModel):
    name: str
    sets: int
    reps: str
    weight_suggestion: Optional[str] = None
    rest_seconds: Optional[int] = None


class ContextRoutine(BaseModel):
    name: str
    description: Optional[str] = None
    target_muscle_groups: List[str] = Field(default_factory=list)
    estimated_duration_minutes: Optional[int] = None
    exercises: List[ContextExercise] = Field(default_factory=list)


class ContextSession(BaseModel):
    completed_at: Optional[str] = None
    duration_seconds: Optional[int] = None
    xp_earned: Optional[int] = None


class ContextProfile(BaseModel):
    full_name: Optional[str] = None
    goal: Optional[str] = None
    experience_level: Optional[str] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    streak_days: int = 0
    total_xp: int = 0


class UserContext(BaseModel):
    """Snapshot of profile, active routine and recent sessions."""

    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[ContextProfile] = None
    active_routine: Optional[ContextRoutine] = Field(default=None, alias="activeRoutine")
    last_session: Optional[ContextSession] = Field(default=None, alias="lastSession")
    weekly_sessions: List[ContextSession] = Field(default_factory=list, alias="weeklySessions")
