"""Voice helpers for the CLI: transcribe recordings and play coach replies."""

import asyncio
import base64
import logging
import mimetypes
import os
import shutil
import tempfile
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from ..exceptions import CoachAIError
from .api_client import CoachAPIClient

logger = logging.getLogger(__name__)

Player = Callable[[Path], Awaitable[None]]

# Command-line players tried in order; each takes the file path last
PLAYER_COMMANDS: Sequence[Sequence[str]] = (
    ("mpg123", "-q"),
    ("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),
    ("afplay",),
    ("mpv", "--no-video", "--really-quiet"),
)

AUDIO_MIME_TYPES = {
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".wav": "audio/wav",
}


def find_player() -> Optional[Player]:
    """Return a player for the first available command, if any."""
    for command in PLAYER_COMMANDS:
        if shutil.which(command[0]):
            return _command_player(command)
    return None


def _command_player(command: Sequence[str]) -> Player:
    async def play(path: Path) -> None:
        process = await asyncio.create_subprocess_exec(
            *command,
            str(path),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        code = await process.wait()
        if code != 0:
            raise RuntimeError(f"{command[0]} exited with status {code}")

    return play


def guess_audio_mime(path: Path) -> str:
    return AUDIO_MIME_TYPES.get(path.suffix.lower()) or mimetypes.guess_type(str(path))[0] or "audio/webm"


class VoiceClient:
    """Speech in and out through ``stt-coach`` and ``tts-coach``."""

    def __init__(self, api: CoachAPIClient, player: Optional[Player] = None):
        self.api = api
        self.player = player if player is not None else find_player()

    async def transcribe(self, audio: bytes, mime_type: str = "audio/webm") -> Optional[str]:
        """Return the transcription, or None when it failed or was empty."""
        encoded = base64.b64encode(audio).decode("ascii")
        try:
            text = await self.api.speech_to_text(encoded, mime_type)
        except (CoachAIError, httpx.HTTPError) as e:
            logger.error(f"STT error: {e}")
            return None
        return text or None

    async def transcribe_file(self, path: Path) -> Optional[str]:
        return await self.transcribe(path.read_bytes(), guess_audio_mime(path))

    async def speak(self, text: str) -> bool:
        """Synthesize and play ``text``; the temporary file is always removed.

        Returns False when nothing was played.
        """
        if not text or not text.strip():
            return False
        if self.player is None:
            logger.warning("No audio player available, skipping playback")
            return False

        try:
            audio = await self.api.text_to_speech(text)
        except (CoachAIError, httpx.HTTPError) as e:
            logger.error(f"Error playing audio: {e}")
            return False

        fd, name = tempfile.mkstemp(prefix="coach-tts-", suffix=".mp3")
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(audio)
            await self.player(path)
            return True
        except (OSError, RuntimeError) as e:
            logger.error(f"Audio playback failed: {e}")
            return False
        finally:
            path.unlink(missing_ok=True)
