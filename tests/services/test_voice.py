"""Tests for the ElevenLabs voice proxy using httpx.MockTransport."""

import base64
import json

import httpx
import pytest

from coach_ai.exceptions import ValidationError, VoiceServiceError
from coach_ai.services.voice import MAX_TTS_CHARS, VOICE_SETTINGS, VoiceService


def make_service(settings, handler):
    http = httpx.AsyncClient(
        base_url=settings.elevenlabs_base_url,
        transport=httpx.MockTransport(handler),
    )
    return VoiceService(settings, http=http)


class TestSynthesize:

    async def test_returns_mp3_bytes(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers["xi-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=b"ID3audio")

        service = make_service(settings, handler)
        audio = await service.synthesize("¡Vamos, una serie más!")

        assert audio == b"ID3audio"
        assert f"/text-to-speech/{settings.elevenlabs_voice_id}" in seen["url"]
        assert "output_format=mp3_44100_128" in seen["url"]
        assert seen["key"] == "test-elevenlabs-key"
        assert seen["body"]["model_id"] == "eleven_turbo_v2_5"
        assert seen["body"]["voice_settings"] == VOICE_SETTINGS

    async def test_truncates_long_text(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["text"] = json.loads(request.content)["text"]
            return httpx.Response(200, content=b"ok")

        await make_service(settings, handler).synthesize("a" * 2500)
        assert len(seen["text"]) == MAX_TTS_CHARS

    @pytest.mark.parametrize("text", [None, "", "   "])
    async def test_requires_text(self, settings, text):
        service = make_service(settings, lambda request: httpx.Response(200))
        with pytest.raises(ValidationError) as exc_info:
            await service.synthesize(text)
        assert exc_info.value.message == "Text is required"

    async def test_upstream_failure(self, settings):
        service = make_service(settings, lambda request: httpx.Response(401, text="invalid key"))
        with pytest.raises(VoiceServiceError) as exc_info:
            await service.synthesize("hola")
        assert exc_info.value.message == "TTS generation failed: 401"
        assert exc_info.value.status_code == 500

    async def test_missing_key(self, settings):
        settings.elevenlabs_api_key = ""
        service = make_service(settings, lambda request: httpx.Response(200))
        with pytest.raises(VoiceServiceError):
            await service.synthesize("hola")


class TestTranscribe:

    async def test_returns_text(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(200, json={"text": "  ¿Cuántas series hago?  "})

        service = make_service(settings, handler)
        audio = base64.b64encode(b"fake-ogg-bytes").decode()
        text = await service.transcribe(audio, "audio/ogg;codecs=opus")

        assert text == "¿Cuántas series hago?"
        assert seen["path"].endswith("/speech-to-text")
        assert b'filename="recording.ogg"' in seen["body"]
        assert b"scribe_v1" in seen["body"]

    async def test_requires_audio(self, settings):
        service = make_service(settings, lambda request: httpx.Response(200))
        with pytest.raises(ValidationError):
            await service.transcribe(None)

    async def test_rejects_invalid_base64(self, settings):
        service = make_service(settings, lambda request: httpx.Response(200))
        with pytest.raises(ValidationError):
            await service.transcribe("not base64!!")

    async def test_upstream_failure(self, settings):
        service = make_service(settings, lambda request: httpx.Response(500))
        with pytest.raises(VoiceServiceError) as exc_info:
            await service.transcribe(base64.b64encode(b"x").decode())
        assert exc_info.value.message == "Transcription failed: 500"
