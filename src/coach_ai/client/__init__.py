"""Client-side helpers used by the CLI: API calls, SSE parsing, camera and audio."""

from .sse import SSEAccumulator
from .api_client import CoachAPIClient
from .audio import VoiceClient
from .camera import AutoAnalyzer, Camera, CameraError, encode_frame

__all__ = [
    "SSEAccumulator",
    "CoachAPIClient",
    "VoiceClient",
    "AutoAnalyzer",
    "Camera",
    "CameraError",
    "encode_frame",
]
