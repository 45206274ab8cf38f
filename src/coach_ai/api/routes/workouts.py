"""generate-workout: AI routine generation."""

import logging

from fastapi import APIRouter, Depends

from ..deps import get_routine_service
from ..middleware.auth import CurrentUser, get_current_user
from ...services.routine_service import RoutineGenerationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate-workout")
async def generate_workout(
    current_user: CurrentUser = Depends(get_current_user),
    service: RoutineGenerationService = Depends(get_routine_service),
):
    """
    Generate a routine for the caller's profile and make it the active one.

    Returns ``{"routine": {..., "routine_exercises": [...]}}`` with the
    exercises ordered by ``order_index``.
    """
    routine = await service.generate(current_user.user_id)
    return {"routine": routine.to_dict()}
