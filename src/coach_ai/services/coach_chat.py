"""Streaming chat coach."""

import logging
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, List, Optional

from ..db.repositories import ProfileRepository, RoutineRepository, SessionRepository
from ..llm.context_builder import build_coach_system_prompt
from ..llm.gateway import AIGatewayClient, UpstreamMessages
from ..models.chat import (
    ChatMessage,
    ContextExercise,
    ContextProfile,
    ContextRoutine,
    ContextSession,
    UserContext,
)

logger = logging.getLogger(__name__)

CHAT_FAILURES = UpstreamMessages(
    rate_limited="Demasiadas solicitudes. Espera un momento e inténtalo de nuevo.",
    payment_required="Se agotaron los créditos de IA. Recarga tu cuenta.",
)


class CoachChatService:
    """Forwards the conversation with a context-aware system prompt."""

    def __init__(self, gateway: AIGatewayClient):
        self.gateway = gateway

    def build_messages(
        self,
        messages: List[ChatMessage],
        context: Optional[UserContext] = None,
    ) -> List[dict]:
        system = build_coach_system_prompt(context)
        # Client-sent system turns are dropped
        history = [m.model_dump() for m in messages if m.role != "system"]
        return [{"role": "system", "content": system}, *history]

    async def open_stream(
        self,
        messages: List[ChatMessage],
        context: Optional[UserContext] = None,
    ) -> AsyncIterator[bytes]:
        """Return the upstream SSE byte stream, relayed unmodified.

        Raises:
            AIGatewayError: Classified upstream failure
        """
        logger.info(f"Coach chat with {len(messages)} message(s), context={'yes' if context else 'no'}")
        return await self.gateway.open_stream(self.build_messages(messages, context), CHAT_FAILURES)


def collect_user_context(
    user_id: str,
    profiles: ProfileRepository,
    routines: RoutineRepository,
    sessions: SessionRepository,
    now: Optional[datetime] = None,
) -> UserContext:
    """Snapshot the profile, active routine and recent sessions for the coach."""
    now = now or datetime.now(timezone.utc)
    profile = profiles.get(user_id)
    routine = routines.get_active(user_id)
    last = sessions.last_completed(user_id)
    weekly = sessions.completed_since(user_id, now - timedelta(days=7))

    def session_snapshot(session) -> ContextSession:
        return ContextSession(
            completed_at=session.completed_at,
            duration_seconds=session.duration_seconds,
            xp_earned=session.xp_earned,
        )

    return UserContext(
        profile=ContextProfile(
            full_name=profile.full_name,
            goal=profile.goal,
            experience_level=profile.experience_level,
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            streak_days=profile.streak_days,
            total_xp=profile.total_xp,
        ) if profile else None,
        active_routine=ContextRoutine(
            name=routine.name,
            description=routine.description,
            target_muscle_groups=routine.target_muscle_groups,
            estimated_duration_minutes=routine.estimated_duration_minutes,
            exercises=[
                ContextExercise(
                    name=e.name,
                    sets=e.sets,
                    reps=e.reps,
                    weight_suggestion=e.weight_suggestion,
                    rest_seconds=e.rest_seconds,
                )
                for e in routine.exercises
            ],
        ) if routine else None,
        last_session=session_snapshot(last) if last else None,
        weekly_sessions=[session_snapshot(s) for s in weekly],
    )
