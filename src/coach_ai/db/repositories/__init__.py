"""Repositories over the database adapters."""

from .base import AdapterRepository
from .profile_repository import ProfileRepository
from .routine_repository import RoutineRepository
from .session_repository import SessionRepository
from .notification_repository import NotificationRepository

__all__ = [
    "AdapterRepository",
    "ProfileRepository",
    "RoutineRepository",
    "SessionRepository",
    "NotificationRepository",
]
