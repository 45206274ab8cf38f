"""Domain models."""

from .profile import (
    Goal,
    ExperienceLevel,
    Profile,
    OnboardingAnswers,
    parse_goal,
    parse_level,
)
from .routine import Difficulty, RoutineExercise, WorkoutRoutine, stored_difficulty
from .session import WorkoutSession, CompletedSet, parse_timestamp
from .notifications import (
    NotificationPreferences,
    PushSubscription,
    PushPayload,
    PushResult,
)
from .form_analysis import (
    FormAnalysis,
    FormIssue,
    BodyPointStatus,
    Parsed,
    Fallback,
    AnalysisResult,
    fallback_analysis,
)
from .chat import ChatMessage, UserContext
from .notice import Notice, NoticeLevel

__all__ = [
    "Goal",
    "ExperienceLevel",
    "Profile",
    "OnboardingAnswers",
    "parse_goal",
    "parse_level",
    "Difficulty",
    "RoutineExercise",
    "WorkoutRoutine",
    "stored_difficulty",
    "WorkoutSession",
    "CompletedSet",
    "parse_timestamp",
    "NotificationPreferences",
    "PushSubscription",
    "PushPayload",
    "PushResult",
    "FormAnalysis",
    "FormIssue",
    "BodyPointStatus",
    "Parsed",
    "Fallback",
    "AnalysisResult",
    "fallback_analysis",
    "ChatMessage",
    "UserContext",
    "Notice",
    "NoticeLevel",
]
