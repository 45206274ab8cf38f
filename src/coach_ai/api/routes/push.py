"""send-push and coach-reminder-cron."""

import logging

from fastapi import APIRouter, Depends

from ..deps import get_push_service, get_reminder_service
from ..middleware.auth import require_service_key
from ..schemas import PushResponse, ReminderRunResponse, SendPushRequest
from ...models.notifications import PushResult
from ...services.push import PushService
from ...services.reminders import ReminderService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/send-push",
    response_model=PushResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_service_key)],
)
async def send_push(
    request: SendPushRequest,
    service: PushService = Depends(get_push_service),
):
    """Deliver one notification to the user's stored subscription."""
    if not request.user_id:
        return PushResponse(**PushResult(success=False, reason="No subscription or disabled").to_dict())
    result = await service.send(request.user_id, request.title, request.body, request.url)
    return PushResponse(**result.to_dict())


@router.post(
    "/coach-reminder-cron",
    response_model=ReminderRunResponse,
    response_model_by_alias=True,
    dependencies=[Depends(require_service_key)],
)
async def coach_reminder_cron(
    service: ReminderService = Depends(get_reminder_service),
):
    """One reminder pass over every enabled subscription; meant for an hourly cron."""
    result = await service.run()
    return ReminderRunResponse(**result)
