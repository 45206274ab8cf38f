"""Profile data models and onboarding option mapping."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class Goal(str, Enum):
    """Training objective stored on the profile."""
    LOSE_FAT = "lose_fat"
    BUILD_MUSCLE = "build_muscle"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    MAINTAIN = "maintain"

    @property
    def label(self) -> str:
        return GOAL_LABELS[self]


class ExperienceLevel(str, Enum):
    """Self-reported training experience."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ELITE = "elite"

    @property
    def label(self) -> str:
        return LEVEL_LABELS[self]


GOAL_LABELS: Dict[Goal, str] = {
    Goal.LOSE_FAT: "Perder grasa",
    Goal.BUILD_MUSCLE: "Ganar músculo",
    Goal.STRENGTH: "Ganar fuerza",
    Goal.ENDURANCE: "Resistencia",
    Goal.MAINTAIN: "Mantenerme",
}

LEVEL_LABELS: Dict[ExperienceLevel, str] = {
    ExperienceLevel.BEGINNER: "Principiante",
    ExperienceLevel.INTERMEDIATE: "Intermedio",
    ExperienceLevel.ADVANCED: "Avanzado",
    ExperienceLevel.ELITE: "Élite",
}

# Answers offered by the onboarding conversation
ONBOARDING_OBJECTIVES: Dict[str, Goal] = {
    "Perder grasa": Goal.LOSE_FAT,
    "Ganar músculo": Goal.BUILD_MUSCLE,
    "Mejorar resistencia": Goal.ENDURANCE,
    "Mantenerme activo": Goal.MAINTAIN,
}

ONBOARDING_LEVELS: Dict[str, ExperienceLevel] = {
    "Principiante": ExperienceLevel.BEGINNER,
    "Intermedio": ExperienceLevel.INTERMEDIATE,
    "Avanzado": ExperienceLevel.ADVANCED,
}

TRAINING_FREQUENCIES = ("2-3 días", "4-5 días", "6+ días")


def parse_goal(value: Optional[str]) -> Optional[Goal]:
    """Best-effort conversion of a stored goal string."""
    if not value:
        return None
    try:
        return Goal(value)
    except ValueError:
        return ONBOARDING_OBJECTIVES.get(value)


def parse_level(value: Optional[str]) -> Optional[ExperienceLevel]:
    """Best-effort conversion of a stored experience level string."""
    if not value:
        return None
    try:
        return ExperienceLevel(value)
    except ValueError:
        return ONBOARDING_LEVELS.get(value)


@dataclass
class Profile:
    """One row of the ``profiles`` table."""
    user_id: str
    id: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    goal: Optional[str] = None
    experience_level: Optional[str] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    streak_days: int = 0
    total_xp: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def goal_enum(self) -> Optional[Goal]:
        return parse_goal(self.goal)

    @property
    def level_enum(self) -> Optional[ExperienceLevel]:
        return parse_level(self.experience_level)

    @property
    def first_name(self) -> Optional[str]:
        if not self.full_name:
            return None
        return self.full_name.split()[0]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            user_id=data["user_id"],
            id=data.get("id"),
            full_name=data.get("full_name"),
            avatar_url=data.get("avatar_url"),
            goal=data.get("goal"),
            experience_level=data.get("experience_level"),
            weight_kg=data.get("weight_kg"),
            height_cm=data.get("height_cm"),
            streak_days=data.get("streak_days") or 0,
            total_xp=data.get("total_xp") or 0,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class OnboardingAnswers:
    """Answers collected by the onboarding flow."""
    objective: str
    frequency: str
    level: str
    full_name: Optional[str] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
