"""Onboarding, goal editing and notification preferences."""

import logging
from typing import List, Optional

from ..db.repositories import NotificationRepository, ProfileRepository
from ..exceptions import DatabaseError, ValidationError
from ..models.notice import Notice
from ..models.notifications import TRAINING_TIMES, WEEK_DAYS, NotificationPreferences, PushSubscription
from ..models.profile import (
    ONBOARDING_LEVELS,
    ONBOARDING_OBJECTIVES,
    TRAINING_FREQUENCIES,
    OnboardingAnswers,
    Profile,
    parse_goal,
    parse_level,
)

logger = logging.getLogger(__name__)


class ProfileService:
    """Profile and notification-settings mutations.

    Mutations that back a user action return a ``Notice`` instead of
    raising on persistence failures, mirroring the app's toasts.
    """

    def __init__(self, profiles: ProfileRepository, notifications: NotificationRepository):
        self.profiles = profiles
        self.notifications = notifications

    def onboard(self, user_id: str, answers: OnboardingAnswers) -> Profile:
        """Store the onboarding answers on the profile.

        The chosen frequency becomes the notification training days so the
        reminder job knows which weekdays apply.

        Raises:
            ValidationError: Unknown objective, level or frequency
            DatabaseError: Persistence failed
        """
        goal = ONBOARDING_OBJECTIVES.get(answers.objective) or parse_goal(answers.objective)
        if goal is None:
            raise ValidationError(f"Unknown objective: {answers.objective}", field="objective")
        level = ONBOARDING_LEVELS.get(answers.level) or parse_level(answers.level)
        if level is None:
            raise ValidationError(f"Unknown level: {answers.level}", field="level")
        if answers.frequency not in TRAINING_FREQUENCIES:
            raise ValidationError(f"Unknown frequency: {answers.frequency}", field="frequency")

        self.profiles.get_or_create(user_id, answers.full_name)
        fields = {"goal": goal.value, "experience_level": level.value}
        if answers.full_name:
            fields["full_name"] = answers.full_name
        if answers.weight_kg is not None:
            fields["weight_kg"] = answers.weight_kg
        if answers.height_cm is not None:
            fields["height_cm"] = answers.height_cm
        profile = self.profiles.update(user_id, **fields)

        self.notifications.upsert(user_id, training_days=[answers.frequency])
        logger.info(f"Onboarding stored for user {user_id}: goal={goal.value}, level={level.value}")
        return profile

    def update_goal(self, user_id: str, goal: str, level: str) -> Notice:
        goal_enum = parse_goal(goal)
        level_enum = parse_level(level)
        if goal_enum is None or level_enum is None:
            return Notice.error("Error al guardar")
        try:
            self.profiles.update(user_id, goal=goal_enum.value, experience_level=level_enum.value)
        except DatabaseError as e:
            logger.error(f"Error updating goal: {e.message}")
            return Notice.error("Error al guardar")
        return Notice.success("Objetivo actualizado")

    def preferences(self, user_id: str) -> NotificationPreferences:
        return self.notifications.get(user_id) or NotificationPreferences(user_id=user_id)

    def save_preferences(self, user_id: str, preferred_time: str, training_days: List[str]) -> Notice:
        """
        Raises:
            ValidationError: Time or days outside the offered options
        """
        if preferred_time not in TRAINING_TIMES:
            raise ValidationError(f"Unsupported training time: {preferred_time}", field="preferred_training_time")
        unknown = [day for day in training_days if day not in WEEK_DAYS and day not in TRAINING_FREQUENCIES]
        if unknown:
            raise ValidationError(f"Unknown training days: {', '.join(unknown)}", field="training_days")

        try:
            self.notifications.upsert(
                user_id,
                preferred_training_time=preferred_time,
                training_days=list(training_days),
            )
        except DatabaseError as e:
            logger.error(f"Error updating preferences: {e.message}")
            return Notice.error("Error al guardar preferencias")
        return Notice.success("Preferencias guardadas")

    def subscribe(self, user_id: str, subscription: PushSubscription) -> Notice:
        try:
            self.notifications.upsert(
                user_id,
                push_subscription=subscription.to_dict(),
                notifications_enabled=True,
            )
        except DatabaseError as e:
            logger.error(f"Error subscribing to push: {e.message}")
            return Notice.error("Error al activar notificaciones")
        return Notice.success("¡Notificaciones activadas!")

    def unsubscribe(self, user_id: str) -> Notice:
        try:
            self.notifications.upsert(user_id, push_subscription=None, notifications_enabled=False)
        except DatabaseError as e:
            logger.error(f"Error unsubscribing: {e.message}")
            return Notice.error("Error al desactivar notificaciones")
        return Notice.success("Notificaciones desactivadas")

    def profile(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)
