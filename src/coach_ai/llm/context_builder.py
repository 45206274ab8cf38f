"""Build the user-context block appended to the coach system prompt."""

from datetime import datetime, timezone
from typing import List, Optional

from .prompts import COACH_CONTEXT_HEADER, COACH_SYSTEM_PROMPT
from ..models.chat import ContextSession, UserContext
from ..models.profile import parse_goal, parse_level
from ..models.session import parse_timestamp


def _format_duration(seconds: Optional[int]) -> str:
    if not seconds:
        return "?"
    return f"{seconds // 60} min"


def _days_ago(session: ContextSession, now: datetime) -> Optional[int]:
    completed = parse_timestamp(session.completed_at)
    if completed is None:
        return None
    return max((now.date() - completed.date()).days, 0)


def build_context_lines(context: UserContext, now: Optional[datetime] = None) -> List[str]:
    """Render the snapshot as short bullet lines (Spanish)."""
    now = now or datetime.now(timezone.utc)
    lines: List[str] = []

    profile = context.profile
    if profile:
        if profile.full_name:
            lines.append(f"- Nombre: {profile.full_name}")
        goal = parse_goal(profile.goal)
        if goal or profile.goal:
            lines.append(f"- Objetivo: {goal.label if goal else profile.goal}")
        level = parse_level(profile.experience_level)
        if level or profile.experience_level:
            lines.append(f"- Nivel: {level.label if level else profile.experience_level}")
        if profile.weight_kg:
            lines.append(f"- Peso: {profile.weight_kg:g} kg")
        if profile.height_cm:
            lines.append(f"- Altura: {profile.height_cm:g} cm")
        lines.append(f"- Racha actual: {profile.streak_days} días")
        lines.append(f"- XP total: {profile.total_xp}")

    routine = context.active_routine
    if routine:
        header = f"- Rutina activa: {routine.name}"
        if routine.target_muscle_groups:
            header += f" ({', '.join(routine.target_muscle_groups)})"
        if routine.estimated_duration_minutes:
            header += f", ~{routine.estimated_duration_minutes} min"
        lines.append(header)
        for exercise in routine.exercises:
            detail = f"  * {exercise.name}: {exercise.sets}x{exercise.reps}"
            if exercise.weight_suggestion:
                detail += f" @ {exercise.weight_suggestion}"
            if exercise.rest_seconds:
                detail += f", descanso {exercise.rest_seconds}s"
            lines.append(detail)
    else:
        lines.append("- Sin rutina activa")

    if context.last_session:
        days = _days_ago(context.last_session, now)
        when = "fecha desconocida" if days is None else ("hoy" if days == 0 else f"hace {days} días")
        lines.append(
            f"- Última sesión: {when}, {_format_duration(context.last_session.duration_seconds)}, "
            f"{context.last_session.xp_earned or 0} XP"
        )
    else:
        lines.append("- Todavía no ha completado ninguna sesión")

    lines.append(f"- Sesiones esta semana: {len(context.weekly_sessions)}")
    return lines


def build_coach_system_prompt(context: Optional[UserContext], now: Optional[datetime] = None) -> str:
    """Persona prompt plus the context block when a snapshot was sent."""
    if context is None:
        return COACH_SYSTEM_PROMPT
    lines = build_context_lines(context, now)
    return f"{COACH_SYSTEM_PROMPT}\n\n{COACH_CONTEXT_HEADER}\n" + "\n".join(lines)
