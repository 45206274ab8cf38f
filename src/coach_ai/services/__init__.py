"""Application services."""

from .routine_service import RoutineGenerationService
from .coach_chat import CoachChatService, collect_user_context
from .form_analysis import FormAnalysisService, parse_form_analysis
from .voice import VoiceService
from .push import PushService, VapidSigner
from .reminders import ReminderService
from .reminder_scheduler import ReminderScheduler
from .insights import InsightService, dashboard_insight, format_duration
from .profile_service import ProfileService

__all__ = [
    "RoutineGenerationService",
    "CoachChatService",
    "collect_user_context",
    "FormAnalysisService",
    "parse_form_analysis",
    "VoiceService",
    "PushService",
    "VapidSigner",
    "ReminderService",
    "ReminderScheduler",
    "InsightService",
    "dashboard_insight",
    "format_duration",
    "ProfileService",
]
