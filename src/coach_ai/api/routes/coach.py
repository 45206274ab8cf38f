"""ai-coach: streaming chat with the coach persona."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..deps import get_chat_service
from ..middleware.auth import CurrentUser, get_current_user
from ..schemas import ChatRequest
from ...services.coach_chat import CoachChatService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/ai-coach")
async def ai_coach(
    request: ChatRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CoachChatService = Depends(get_chat_service),
):
    """
    Relay the model's SSE stream unmodified.

    Upstream failures are classified before the stream starts, so they come
    back as JSON errors (429 / 402 / 500) instead of a broken stream.
    """
    logger.info(f"ai-coach request from user {current_user.user_id}")
    stream = await service.open_stream(request.messages, request.user_context)
    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
