"""Dashboard insight, weekly activity and session summary formatting."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..db.repositories import ProfileRepository, SessionRepository
from ..models.profile import Goal, Profile
from ..models.session import WorkoutSession

WEEKDAY_INITIALS = ("L", "M", "X", "J", "V", "S", "D")

STREAK_MENTION_DAYS = 3

GOAL_ADVICE = {
    Goal.LOSE_FAT: "Mantén el déficit calórico y no te saltes el cardio al final.",
    Goal.BUILD_MUSCLE: "Prioriza la sobrecarga progresiva y llega a tu proteína diaria.",
    Goal.STRENGTH: "Descansa bien entre series pesadas y cuida la técnica.",
    Goal.ENDURANCE: "Sube el volumen poco a poco y controla el ritmo.",
    Goal.MAINTAIN: "La constancia es la clave: no rompas el hábito.",
}


def days_since(last: Optional[WorkoutSession], now: datetime) -> Optional[int]:
    """Whole calendar days (UTC) since the session was completed."""
    if not last or not last.completed_at_dt:
        return None
    completed = last.completed_at_dt.astimezone(timezone.utc).date()
    return max((now.astimezone(timezone.utc).date() - completed).days, 0)


def recency_phrase(days: Optional[int]) -> str:
    if days is None:
        return "Aún no has entrenado conmigo. Hoy es el día perfecto para tu primera sesión."
    if days == 0:
        return "Ya entrenaste hoy. Buen trabajo, ahora toca recuperar."
    if days == 1:
        return "Tu último entreno fue ayer. Hoy toca mantener el ritmo."
    return f"Llevas {days} días sin entrenar. Es momento de volver."


def dashboard_insight(profile: Optional[Profile], last: Optional[WorkoutSession], now: datetime) -> str:
    """Build the coach insight shown on the dashboard."""
    parts = [recency_phrase(days_since(last, now))]

    streak = profile.streak_days if profile else 0
    if streak >= STREAK_MENTION_DAYS:
        parts.append(f"Tu racha es de {streak} días, no la pierdas.")

    goal = profile.goal_enum if profile else None
    if goal:
        parts.append(GOAL_ADVICE[goal])
    return " ".join(parts)


@dataclass
class WeeklyActivity:
    """Sessions completed per weekday of the current ISO week (Monday first)."""
    sessions_per_day: List[int] = field(default_factory=lambda: [0] * 7)
    total_minutes: int = 0
    total_xp: int = 0

    @property
    def total_sessions(self) -> int:
        return sum(self.sessions_per_day)


def week_start(now: datetime) -> datetime:
    now = now.astimezone(timezone.utc)
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def weekly_activity(sessions: List[WorkoutSession], now: datetime) -> WeeklyActivity:
    start = week_start(now)
    activity = WeeklyActivity()
    for session in sessions:
        completed = session.completed_at_dt
        if completed is None or completed < start:
            continue
        activity.sessions_per_day[completed.astimezone(timezone.utc).weekday()] += 1
        activity.total_minutes += (session.duration_seconds or 0) // 60
        activity.total_xp += session.xp_earned or 0
    return activity


def format_duration(seconds: int) -> str:
    """Format seconds as ``mm:ss`` (minutes are not capped at 60)."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass
class Dashboard:
    profile: Optional[Profile]
    insight: str
    week: WeeklyActivity
    last_session: Optional[WorkoutSession] = None


class InsightService:

    def __init__(self, profiles: ProfileRepository, sessions: SessionRepository):
        self.profiles = profiles
        self.sessions = sessions

    def dashboard(self, user_id: str, now: Optional[datetime] = None) -> Dashboard:
        now = now or datetime.now(timezone.utc)
        profile = self.profiles.get(user_id)
        last = self.sessions.last_completed(user_id)
        week = weekly_activity(self.sessions.completed_since(user_id, week_start(now)), now)
        return Dashboard(
            profile=profile,
            insight=dashboard_insight(profile, last, now),
            week=week,
            last_session=last,
        )
