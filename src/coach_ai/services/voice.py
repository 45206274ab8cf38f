"""Text-to-speech and speech-to-text through ElevenLabs."""

import base64
import binascii
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..exceptions import ValidationError, VoiceServiceError

logger = logging.getLogger(__name__)

MAX_TTS_CHARS = 2000

VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.4,
    "use_speaker_boost": True,
    "speed": 1.05,
}

MIME_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
}


class VoiceService:
    """
    Proxies voice requests to ElevenLabs.

    The httpx client is injected so tests can use ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.http = http or httpx.AsyncClient(base_url=settings.elevenlabs_base_url)

    def _headers(self) -> dict:
        if not self.settings.elevenlabs_api_key:
            raise VoiceServiceError("ELEVENLABS_API_KEY is not configured")
        return {"xi-api-key": self.settings.elevenlabs_api_key}

    async def synthesize(self, text: Optional[str]) -> bytes:
        """Return MP3 bytes for ``text`` (trimmed to 2000 characters).

        Raises:
            ValidationError: Empty text
            VoiceServiceError: Provider failure
        """
        if not text or not text.strip():
            raise ValidationError("Text is required", field="text")
        headers = self._headers()

        response = await self.http.post(
            f"/text-to-speech/{self.settings.elevenlabs_voice_id}",
            params={"output_format": "mp3_44100_128"},
            headers=headers,
            json={
                "text": text[:MAX_TTS_CHARS],
                "model_id": self.settings.elevenlabs_tts_model,
                "voice_settings": VOICE_SETTINGS,
            },
        )
        if response.status_code != 200:
            logger.error(f"ElevenLabs TTS error: {response.status_code} {response.text[:200]}")
            raise VoiceServiceError(
                f"TTS generation failed: {response.status_code}",
                details={"upstream_status": response.status_code},
            )
        return response.content

    async def transcribe(self, audio_base64: Optional[str], mime_type: str = "audio/webm") -> str:
        """Transcribe base64 encoded audio.

        Raises:
            ValidationError: Missing or undecodable audio
            VoiceServiceError: Provider failure
        """
        if not audio_base64:
            raise ValidationError("Audio is required", field="audio")
        try:
            audio = base64.b64decode(audio_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError("Audio is not valid base64", field="audio") from e
        headers = self._headers()

        base_mime = mime_type.split(";")[0].strip()
        filename = f"recording.{MIME_EXTENSIONS.get(base_mime, 'webm')}"

        response = await self.http.post(
            "/speech-to-text",
            headers=headers,
            data={"model_id": self.settings.elevenlabs_stt_model},
            files={"file": (filename, audio, base_mime)},
        )
        if response.status_code != 200:
            logger.error(f"ElevenLabs STT error: {response.status_code} {response.text[:200]}")
            raise VoiceServiceError(
                f"Transcription failed: {response.status_code}",
                details={"upstream_status": response.status_code},
            )
        return (response.json().get("text") or "").strip()

    async def aclose(self) -> None:
        await self.http.aclose()
