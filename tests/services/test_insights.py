"""Tests for the dashboard insight and weekly activity."""

from datetime import timedelta

import pytest

from conftest import USER_ID, complete_session_at, utc
from coach_ai.models.profile import Goal, Profile
from coach_ai.models.session import WorkoutSession
from coach_ai.services.insights import (
    GOAL_ADVICE,
    InsightService,
    dashboard_insight,
    days_since,
    format_duration,
    recency_phrase,
    week_start,
    weekly_activity,
)

WEDNESDAY = utc(2024, 6, 12, 10)


def finished(when, duration=1800, xp=80) -> WorkoutSession:
    return WorkoutSession(user_id=USER_ID, completed_at=when.isoformat(), duration_seconds=duration, xp_earned=xp)


class TestDashboardInsight:

    def test_example_three_days_with_streak(self):
        profile = Profile(user_id=USER_ID, goal="lose_fat", streak_days=12)
        insight = dashboard_insight(profile, finished(WEDNESDAY - timedelta(days=3)), WEDNESDAY)
        assert "3 días" in insight
        assert "Tu racha es de 12 días" in insight
        assert GOAL_ADVICE[Goal.LOSE_FAT] in insight

    def test_never_trained(self):
        insight = dashboard_insight(None, None, WEDNESDAY)
        assert insight == recency_phrase(None)

    def test_short_streak_not_mentioned(self):
        profile = Profile(user_id=USER_ID, streak_days=2)
        insight = dashboard_insight(profile, finished(WEDNESDAY), WEDNESDAY)
        assert "racha" not in insight
        assert insight.startswith("Ya entrenaste hoy")

    def test_yesterday(self):
        assert "ayer" in recency_phrase(1)

    def test_days_since_uses_calendar_days(self):
        late_yesterday = utc(2024, 6, 11, 23, 30)
        assert days_since(finished(late_yesterday), utc(2024, 6, 12, 0, 10)) == 1
        assert days_since(None, WEDNESDAY) is None


class TestWeeklyActivity:

    def test_week_starts_monday(self):
        assert week_start(WEDNESDAY) == utc(2024, 6, 10, 0)

    def test_counts_current_week_only(self):
        sessions = [
            finished(utc(2024, 6, 10, 8), duration=1800, xp=80),
            finished(utc(2024, 6, 10, 19), duration=600, xp=30),
            finished(utc(2024, 6, 12, 7), duration=2400, xp=90),
            finished(utc(2024, 6, 9, 12)),
        ]
        activity = weekly_activity(sessions, WEDNESDAY)
        assert activity.sessions_per_day == [2, 0, 1, 0, 0, 0, 0]
        assert activity.total_sessions == 3
        assert activity.total_minutes == 80
        assert activity.total_xp == 200


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "00:00"), (59, "00:59"), (61, "01:01"), (3725, "62:05"), (-5, "00:00")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


class TestInsightService:

    def test_dashboard(self, profiles, sessions, sample_profile):
        complete_session_at(sessions, utc(2024, 6, 11, 18), duration_seconds=1200, xp=70)
        complete_session_at(sessions, utc(2024, 6, 3, 18))

        dashboard = InsightService(profiles, sessions).dashboard(USER_ID, now=WEDNESDAY)
        assert dashboard.profile.user_id == USER_ID
        assert dashboard.week.sessions_per_day[1] == 1
        assert dashboard.week.total_sessions == 1
        assert dashboard.last_session.xp_earned == 70
        assert "ayer" in dashboard.insight
        assert "Tu racha es de 4 días" in dashboard.insight
