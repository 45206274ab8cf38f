"""AI routine generation."""

import json
import logging
from typing import Any, Dict, List

from ..db.repositories import ProfileRepository, RoutineRepository
from ..exceptions import RoutineGenerationError
from ..llm.gateway import AIGatewayClient, UpstreamMessages
from ..llm.prompts import (
    DEFAULT_GOAL,
    DEFAULT_LEVEL,
    ROUTINE_TOOL,
    ROUTINE_TOOL_CHOICE,
    ROUTINE_TOOL_NAME,
    build_routine_messages,
)
from ..models.routine import RoutineExercise, WorkoutRoutine, stored_difficulty

logger = logging.getLogger(__name__)

ROUTINE_FAILURES = UpstreamMessages(
    rate_limited="Límite de solicitudes excedido, intenta de nuevo más tarde.",
    payment_required="Se requiere pago, añade fondos a tu cuenta.",
)


def parse_tool_routine(arguments: Dict[str, Any], user_id: str) -> WorkoutRoutine:
    """Turn the tool-call arguments into an unsaved routine."""
    try:
        exercises: List[RoutineExercise] = []
        for index, item in enumerate(arguments.get("exercises") or []):
            exercises.append(
                RoutineExercise(
                    name=str(item["name"]),
                    sets=int(item["sets"]),
                    reps=str(item["reps"]),
                    rest_seconds=int(item["rest_seconds"]),
                    weight_suggestion=item.get("weight_suggestion") or None,
                    notes=item.get("notes") or None,
                    order_index=index,
                )
            )
        duration = arguments.get("estimated_duration_minutes")
        routine = WorkoutRoutine(
            user_id=user_id,
            name=str(arguments["name"]),
            description=arguments.get("description"),
            target_muscle_groups=list(arguments.get("target_muscle_groups") or []),
            estimated_duration_minutes=int(duration) if duration is not None else None,
            difficulty_level=stored_difficulty(arguments.get("difficulty_level")),
            generated_by_ai=True,
            is_active=True,
            exercises=exercises,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RoutineGenerationError(details={"reason": f"Invalid tool arguments: {e}"}) from e

    if not routine.exercises:
        raise RoutineGenerationError(details={"reason": "Routine without exercises"})
    return routine


class RoutineGenerationService:
    """Generates a routine with the AI gateway and stores it as the active one."""

    def __init__(
        self,
        gateway: AIGatewayClient,
        profiles: ProfileRepository,
        routines: RoutineRepository,
    ):
        self.gateway = gateway
        self.profiles = profiles
        self.routines = routines

    async def generate(self, user_id: str) -> WorkoutRoutine:
        """Generate, then deactivate the old active routine and insert the new one.

        Deactivate and insert are separate, non-transactional writes; two
        concurrent generations for one user can leave two active routines.

        Raises:
            AIGatewayError: Classified upstream failure
            RoutineGenerationError: The model returned no usable routine
            DatabaseError: Persistence failed
        """
        profile = self.profiles.get(user_id)
        goal = DEFAULT_GOAL
        level = DEFAULT_LEVEL
        weight = None
        if profile:
            goal_enum = profile.goal_enum
            level_enum = profile.level_enum
            goal = goal_enum.label if goal_enum else (profile.goal or DEFAULT_GOAL)
            level = level_enum.label if level_enum else (profile.experience_level or DEFAULT_LEVEL)
            weight = profile.weight_kg

        logger.info(f"Generating workout for user {user_id}, goal: {goal}, level: {level}")

        completion = await self.gateway.complete(
            build_routine_messages(goal, level, weight),
            ROUTINE_FAILURES,
            tools=[ROUTINE_TOOL],
            tool_choice=ROUTINE_TOOL_CHOICE,
        )

        message = completion.choices[0].message if completion.choices else None
        tool_calls = (message.tool_calls if message else None) or []
        if not tool_calls or tool_calls[0].function.name != ROUTINE_TOOL_NAME:
            raise RoutineGenerationError(details={"reason": "Invalid AI response format"})

        try:
            arguments = json.loads(tool_calls[0].function.arguments)
        except json.JSONDecodeError as e:
            raise RoutineGenerationError(details={"reason": f"Invalid tool arguments: {e}"}) from e

        routine = parse_tool_routine(arguments, user_id)

        deactivated = self.routines.deactivate_active(user_id)
        if deactivated:
            logger.info(f"Deactivated {deactivated} previous routine(s) for user {user_id}")

        saved = self.routines.create(routine, routine.exercises)
        logger.info(f"Routine saved: {saved.id} with {len(saved.exercises)} exercises")
        return saved
