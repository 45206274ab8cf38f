"""Hourly training reminders (coach-reminder-cron)."""

import logging
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..db.repositories import NotificationRepository, ProfileRepository, SessionRepository
from ..models.notifications import NotificationPreferences
from ..models.session import parse_timestamp
from .push import PushService

logger = logging.getLogger(__name__)

COACH_MESSAGES: Dict[str, List[str]] = {
    "morning": [
        "Buenos días. ¿A qué hora entrenas hoy?",
        "Arriba. Tu rutina te espera.",
        "Día nuevo, oportunidad nueva. ¿Vamos?",
    ],
    "reminder": [
        "¿Ya entrenaste hoy? No me hagas ir a buscarte.",
        "El gym no viene a ti. Tú vas al gym.",
        "Cada día que no entrenas, alguien más te supera.",
    ],
    "streak": [
        "Llevas {streak} días de racha. No lo tires ahora.",
        "{streak} días seguidos. Eso es disciplina.",
        "Tu racha de {streak} días es brutal. Mantén.",
    ],
    "inactive": [
        "{days} días sin entrenar. ¿Qué pasó?",
        "Te has perdido. Vuelve al gym.",
        "Las excusas no queman calorías. Vamos.",
    ],
}

# Python weekday() -> training_days values that match that day.
# Frequency labels cover the first N days of the week.
WEEKDAY_MATCHES: Dict[int, tuple] = {
    0: ("2-3 días", "4-5 días", "6+ días", "lunes"),
    1: ("2-3 días", "4-5 días", "6+ días", "martes"),
    2: ("2-3 días", "4-5 días", "6+ días", "miércoles"),
    3: ("4-5 días", "6+ días", "jueves"),
    4: ("4-5 días", "6+ días", "viernes"),
    5: ("6+ días", "sábado"),
    6: ("6+ días", "domingo"),
}

INACTIVE_AFTER_DAYS = 3
STREAK_MENTION_DAYS = 3


def is_training_day(training_days: List[str], now: datetime) -> bool:
    matches = WEEKDAY_MATCHES[now.weekday()]
    return any(day in matches for day in training_days)


def is_near_preferred_hour(preferences: NotificationPreferences, now: datetime) -> bool:
    """Within one hour of the preferred time, wrapping around midnight."""
    if not preferences.preferred_training_time:
        return True
    diff = abs(now.hour - preferences.preferred_hour)
    return diff <= 1 or diff >= 23


def notified_today(preferences: NotificationPreferences, now: datetime) -> bool:
    last = parse_timestamp(preferences.last_notified_at)
    if last is None:
        return False
    return last.astimezone(timezone.utc).date() == now.date()


def choose_category(days_since_last: Optional[int], streak: int) -> str:
    if days_since_last is None:
        return "morning"
    if days_since_last >= INACTIVE_AFTER_DAYS:
        return "inactive"
    if streak >= STREAK_MENTION_DAYS:
        return "streak"
    return "reminder"


def reminder_title(full_name: Optional[str]) -> str:
    return f"Coach IA para {full_name}" if full_name else "Coach IA"


class ReminderService:
    """Selects users due for a reminder and pushes a coach message to each."""

    def __init__(
        self,
        notifications: NotificationRepository,
        profiles: ProfileRepository,
        sessions: SessionRepository,
        push: PushService,
        rng: Optional[random.Random] = None,
    ):
        self.notifications = notifications
        self.profiles = profiles
        self.sessions = sessions
        self.push = push
        self.rng = rng or random.Random()

    def pick_message(self, category: str, **replacements: str) -> str:
        message = self.rng.choice(COACH_MESSAGES[category])
        for key, value in replacements.items():
            message = message.replace("{" + key + "}", value)
        return message

    def is_due(self, preferences: NotificationPreferences, now: datetime) -> bool:
        if not is_training_day(preferences.training_days, now):
            return False
        if notified_today(preferences, now):
            return False
        return is_near_preferred_hour(preferences, now)

    def compose(self, user_id: str, now: datetime) -> tuple:
        """Return ``(title, body)`` for the user's reminder."""
        profile = self.profiles.get(user_id)
        last = self.sessions.last_completed(user_id)
        streak = profile.streak_days if profile else 0

        days_since = None
        if last and last.completed_at_dt:
            days_since = (now - last.completed_at_dt).days

        category = choose_category(days_since, streak)
        body = self.pick_message(category, streak=str(streak), days=str(days_since))
        return reminder_title(profile.full_name if profile else None), body

    async def run(self, now: Optional[datetime] = None) -> dict:
        """One pass over every deliverable subscription.

        Per-user failures are logged and skipped. Failure to list the
        subscriptions propagates.
        """
        now = now or datetime.now(timezone.utc)
        logger.info("Coach reminder run started")

        candidates = self.notifications.deliverable()
        logger.info(f"Found {len(candidates)} users with notifications enabled")

        sent = 0
        for preferences in candidates:
            try:
                if not self.is_due(preferences, now):
                    continue
                title, body = self.compose(preferences.user_id, now)
                result = await self.push.send(preferences.user_id, title=title, body=body, url="/training")
                if result.success:
                    sent += 1
                    logger.info(f"Notification sent to user {preferences.user_id}")
            except Exception as e:
                logger.error(f"Error processing user {preferences.user_id}: {e}")

        logger.info(f"Reminder run completed. Sent {sent} notifications.")
        return {"success": True, "notificationsSent": sent}
