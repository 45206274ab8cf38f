"""Tests for onboarding, goal editing and notification preferences."""

from unittest.mock import MagicMock

import pytest

from conftest import USER_ID
from coach_ai.exceptions import DatabaseError, ValidationError
from coach_ai.models.notice import NoticeLevel
from coach_ai.models.notifications import PushSubscription
from coach_ai.models.profile import OnboardingAnswers
from coach_ai.services.profile_service import ProfileService

SUBSCRIPTION = PushSubscription(endpoint="https://push.example.com/s/1", p256dh="key", auth="auth")


@pytest.fixture
def service(profiles, notifications):
    return ProfileService(profiles, notifications)


class TestOnboard:

    def test_stores_answers(self, service, profiles, notifications):
        profile = service.onboard(
            USER_ID,
            OnboardingAnswers(
                objective="Ganar músculo",
                frequency="4-5 días",
                level="Intermedio",
                full_name="Ana García",
                weight_kg=62.5,
            ),
        )
        assert profile.goal == "build_muscle"
        assert profile.experience_level == "intermediate"
        assert profiles.get(USER_ID).weight_kg == 62.5
        assert notifications.get(USER_ID).training_days == ["4-5 días"]

    def test_accepts_enum_values(self, service):
        profile = service.onboard(USER_ID, OnboardingAnswers(objective="strength", frequency="6+ días", level="advanced"))
        assert profile.goal == "strength"

    @pytest.mark.parametrize(
        "answers,field",
        [
            (OnboardingAnswers(objective="Volar", frequency="2-3 días", level="Intermedio"), "objective"),
            (OnboardingAnswers(objective="Perder grasa", frequency="2-3 días", level="Dios"), "level"),
            (OnboardingAnswers(objective="Perder grasa", frequency="7 días", level="Intermedio"), "frequency"),
        ],
    )
    def test_rejects_unknown_answers(self, service, profiles, answers, field):
        with pytest.raises(ValidationError) as exc_info:
            service.onboard(USER_ID, answers)
        assert exc_info.value.details["field"] == field
        assert profiles.get(USER_ID) is None


class TestGoal:

    def test_update_goal(self, service, profiles, sample_profile):
        notice = service.update_goal(USER_ID, "strength", "advanced")
        assert notice.level == NoticeLevel.SUCCESS
        assert notice.message == "Objetivo actualizado"
        assert profiles.get(USER_ID).goal == "strength"

    def test_invalid_goal(self, service, sample_profile):
        notice = service.update_goal(USER_ID, "fly", "advanced")
        assert notice.level == NoticeLevel.ERROR
        assert notice.message == "Error al guardar"

    def test_database_failure_becomes_notice(self, notifications):
        profiles = MagicMock()
        profiles.update.side_effect = DatabaseError(operation="profiles.update")
        notice = ProfileService(profiles, notifications).update_goal(USER_ID, "strength", "advanced")
        assert notice.message == "Error al guardar"


class TestNotificationPreferences:

    def test_defaults_without_row(self, service):
        prefs = service.preferences(USER_ID)
        assert prefs.preferred_training_time == "18:00"
        assert prefs.training_days == ["lunes", "miércoles", "viernes"]
        assert prefs.notifications_enabled is False

    def test_save_preferences(self, service):
        notice = service.save_preferences(USER_ID, "07:00", ["martes", "jueves"])
        assert notice.message == "Preferencias guardadas"
        prefs = service.preferences(USER_ID)
        assert prefs.preferred_training_time == "07:00"
        assert prefs.training_days == ["martes", "jueves"]

    def test_rejects_unknown_time(self, service):
        with pytest.raises(ValidationError):
            service.save_preferences(USER_ID, "03:00", ["lunes"])

    def test_rejects_unknown_day(self, service):
        with pytest.raises(ValidationError):
            service.save_preferences(USER_ID, "18:00", ["funday"])

    def test_subscribe_and_unsubscribe(self, service):
        notice = service.subscribe(USER_ID, SUBSCRIPTION)
        assert notice.message == "¡Notificaciones activadas!"
        prefs = service.preferences(USER_ID)
        assert prefs.notifications_enabled is True
        assert prefs.push_subscription == SUBSCRIPTION

        notice = service.unsubscribe(USER_ID)
        assert notice.message == "Notificaciones desactivadas"
        prefs = service.preferences(USER_ID)
        assert prefs.notifications_enabled is False
        assert prefs.push_subscription is None

    def test_subscribe_failure(self, profiles):
        notifications = MagicMock()
        notifications.upsert.side_effect = DatabaseError()
        notice = ProfileService(profiles, notifications).subscribe(USER_ID, SUBSCRIPTION)
        assert notice.level == NoticeLevel.ERROR
        assert notice.message == "Error al activar notificaciones"
