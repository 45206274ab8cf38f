"""tts-coach and stt-coach: ElevenLabs voice proxy."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..deps import get_voice_service
from ..schemas import STTRequest, STTResponse, TTSRequest
from ...services.voice import VoiceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/tts-coach")
async def tts_coach(
    request: TTSRequest,
    service: VoiceService = Depends(get_voice_service),
):
    """Synthesize speech; returns ``audio/mpeg`` bytes."""
    audio = await service.synthesize(request.text)
    logger.info(f"TTS generated {len(audio)} bytes")
    return Response(content=audio, media_type="audio/mpeg")


@router.post("/stt-coach", response_model=STTResponse)
async def stt_coach(
    request: STTRequest,
    service: VoiceService = Depends(get_voice_service),
):
    text = await service.transcribe(request.audio, request.mime_type)
    return STTResponse(text=text)
