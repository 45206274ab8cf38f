"""Tests for the hourly coach reminder pass."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import USER_ID, complete_session_at, utc
from coach_ai.models.notifications import NotificationPreferences, PushResult, PushSubscription
from coach_ai.services.reminders import (
    COACH_MESSAGES,
    ReminderService,
    choose_category,
    is_near_preferred_hour,
    is_training_day,
    notified_today,
    reminder_title,
)

MONDAY_18 = utc(2024, 6, 10, 18)
THURSDAY_18 = utc(2024, 6, 13, 18)
SUNDAY_18 = utc(2024, 6, 16, 18)

SUBSCRIPTION = PushSubscription(endpoint="https://push.example.com/s/1", p256dh="key", auth="auth")


class FirstChoice:
    """Deterministic stand-in for random.Random."""

    def choice(self, seq):
        return seq[0]


def prefs(**overrides) -> NotificationPreferences:
    values = {
        "user_id": USER_ID,
        "notifications_enabled": True,
        "push_subscription": SUBSCRIPTION,
        "preferred_training_time": "18:00",
        "training_days": ["lunes", "miércoles", "viernes"],
    }
    values.update(overrides)
    return NotificationPreferences(**values)


class TestSchedulingRules:

    def test_named_weekday(self):
        assert is_training_day(["lunes"], MONDAY_18)
        assert not is_training_day(["lunes"], THURSDAY_18)

    @pytest.mark.parametrize(
        "label,monday,thursday,sunday",
        [
            ("2-3 días", True, False, False),
            ("4-5 días", True, True, False),
            ("6+ días", True, True, True),
        ],
    )
    def test_frequency_labels(self, label, monday, thursday, sunday):
        assert is_training_day([label], MONDAY_18) is monday
        assert is_training_day([label], THURSDAY_18) is thursday
        assert is_training_day([label], SUNDAY_18) is sunday

    @pytest.mark.parametrize(
        "preferred,hour,expected",
        [
            ("18:00", 18, True),
            ("18:00", 17, True),
            ("18:00", 19, True),
            ("18:00", 20, False),
            ("06:00", 3, False),
            ("22:00", 23, True),
        ],
    )
    def test_near_preferred_hour(self, preferred, hour, expected):
        now = utc(2024, 6, 10, hour)
        assert is_near_preferred_hour(prefs(preferred_training_time=preferred), now) is expected

    def test_wraps_around_midnight(self):
        # 23:00 preferred, checked at 00:xx
        assert is_near_preferred_hour(prefs(preferred_training_time="23:00"), utc(2024, 6, 10, 0))

    def test_notified_today(self):
        assert notified_today(prefs(last_notified_at=utc(2024, 6, 10, 7).isoformat()), MONDAY_18)
        assert not notified_today(prefs(last_notified_at=utc(2024, 6, 9, 18).isoformat()), MONDAY_18)
        assert not notified_today(prefs(), MONDAY_18)

    @pytest.mark.parametrize(
        "days,streak,expected",
        [
            (None, 0, "morning"),
            (None, 10, "morning"),
            (3, 10, "inactive"),
            (5, 0, "inactive"),
            (1, 3, "streak"),
            (0, 2, "reminder"),
            (2, 0, "reminder"),
        ],
    )
    def test_choose_category(self, days, streak, expected):
        assert choose_category(days, streak) == expected

    def test_reminder_title(self):
        assert reminder_title("Ana García") == "Coach IA para Ana García"
        assert reminder_title(None) == "Coach IA"


class TestReminderService:

    @pytest.fixture
    def push(self):
        push = MagicMock()
        push.send = AsyncMock(return_value=PushResult(success=True))
        return push

    @pytest.fixture
    def service(self, notifications, profiles, sessions, push):
        return ReminderService(notifications, profiles, sessions, push, rng=FirstChoice())

    @pytest.fixture
    def subscribed(self, notifications):
        notifications.upsert(
            USER_ID,
            push_subscription=SUBSCRIPTION.to_dict(),
            notifications_enabled=True,
            preferred_training_time="18:00",
            training_days=["lunes"],
        )

    def test_pick_message_replaces_placeholders(self, service):
        assert service.pick_message("streak", streak="12") == "Llevas 12 días de racha. No lo tires ahora."

    def test_compose_inactive(self, service, sessions, sample_profile):
        complete_session_at(sessions, MONDAY_18 - timedelta(days=4))
        title, body = service.compose(USER_ID, MONDAY_18)
        assert title == "Coach IA para Ana García"
        assert body == "4 días sin entrenar. ¿Qué pasó?"

    def test_compose_streak(self, service, sessions, sample_profile):
        complete_session_at(sessions, MONDAY_18 - timedelta(days=1))
        _, body = service.compose(USER_ID, MONDAY_18)
        assert body == "Llevas 4 días de racha. No lo tires ahora."

    def test_compose_never_trained(self, service):
        title, body = service.compose(USER_ID, MONDAY_18)
        assert title == "Coach IA"
        assert body == COACH_MESSAGES["morning"][0]

    async def test_run_sends_to_due_user(self, service, push, subscribed, sample_profile):
        result = await service.run(now=MONDAY_18)

        assert result == {"success": True, "notificationsSent": 1}
        push.send.assert_awaited_once()
        assert push.send.call_args.args[0] == USER_ID
        assert push.send.call_args.kwargs["title"] == "Coach IA para Ana García"
        assert push.send.call_args.kwargs["url"] == "/training"

    async def test_run_skips_other_days(self, service, push, subscribed):
        result = await service.run(now=THURSDAY_18)
        assert result["notificationsSent"] == 0
        push.send.assert_not_awaited()

    async def test_run_skips_far_from_preferred_hour(self, service, push, subscribed):
        result = await service.run(now=utc(2024, 6, 10, 9))
        assert result["notificationsSent"] == 0

    async def test_run_skips_already_notified(self, service, push, notifications, subscribed):
        notifications.mark_notified(USER_ID, utc(2024, 6, 10, 8))
        result = await service.run(now=MONDAY_18)
        assert result["notificationsSent"] == 0

    async def test_failed_push_is_not_counted(self, service, push, subscribed):
        push.send.return_value = PushResult(success=False, reason="Push service rejected the message (500)")
        result = await service.run(now=MONDAY_18)
        assert result == {"success": True, "notificationsSent": 0}

    async def test_per_user_errors_do_not_stop_the_run(self, service, push, notifications, subscribed):
        notifications.upsert(
            "second-user",
            push_subscription=SUBSCRIPTION.to_dict(),
            notifications_enabled=True,
            training_days=["lunes"],
        )
        push.send.side_effect = [RuntimeError("boom"), PushResult(success=True)]
        result = await service.run(now=MONDAY_18)
        assert result["notificationsSent"] == 1
        assert push.send.await_count == 2
