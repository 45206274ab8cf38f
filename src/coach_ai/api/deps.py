"""Dependency injection for API routes.

Each collaborator is built once per process from the settings; tests swap
them with ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from ..config import get_settings
from ..db import DatabaseAdapter, create_adapter
from ..db.repositories import (
    NotificationRepository,
    ProfileRepository,
    RoutineRepository,
    SessionRepository,
)
from ..exceptions import AINotConfiguredError
from ..llm.gateway import AIGatewayClient
from ..services.coach_chat import CoachChatService
from ..services.form_analysis import FormAnalysisService
from ..services.push import PushService
from ..services.reminder_scheduler import ReminderScheduler
from ..services.reminders import ReminderService
from ..services.routine_service import RoutineGenerationService
from ..services.voice import VoiceService


@lru_cache
def get_database() -> DatabaseAdapter:
    return create_adapter(get_settings())


@lru_cache
def get_profile_repository() -> ProfileRepository:
    return ProfileRepository(get_database())


@lru_cache
def get_routine_repository() -> RoutineRepository:
    return RoutineRepository(get_database())


@lru_cache
def get_session_repository() -> SessionRepository:
    return SessionRepository(get_database())


@lru_cache
def get_notification_repository() -> NotificationRepository:
    return NotificationRepository(get_database())


@lru_cache
def get_gateway() -> AIGatewayClient:
    """Raises AINotConfiguredError (not cached) when the gateway key is missing."""
    return AIGatewayClient(get_settings())


def get_optional_gateway() -> Optional[AIGatewayClient]:
    try:
        return get_gateway()
    except AINotConfiguredError:
        return None


@lru_cache
def get_routine_service() -> RoutineGenerationService:
    return RoutineGenerationService(
        gateway=get_gateway(),
        profiles=get_profile_repository(),
        routines=get_routine_repository(),
    )


@lru_cache
def get_chat_service() -> CoachChatService:
    return CoachChatService(get_gateway())


@lru_cache
def get_form_analysis_service() -> FormAnalysisService:
    return FormAnalysisService(get_gateway())


@lru_cache
def get_voice_service() -> VoiceService:
    return VoiceService(get_settings())


@lru_cache
def get_push_service() -> PushService:
    return PushService(get_settings(), get_notification_repository())


@lru_cache
def get_reminder_service() -> ReminderService:
    return ReminderService(
        notifications=get_notification_repository(),
        profiles=get_profile_repository(),
        sessions=get_session_repository(),
        push=get_push_service(),
    )


@lru_cache
def get_reminder_scheduler() -> ReminderScheduler:
    return ReminderScheduler(get_settings(), get_reminder_service())
