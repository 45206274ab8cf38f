"""HTTP client for the coach functions, used by the CLI."""

import logging
from typing import AsyncIterator, List, Optional

import httpx

from ..config import Settings
from ..exceptions import FunctionCallError
from ..models.chat import ChatMessage, UserContext
from ..models.form_analysis import FormAnalysis
from ..models.notifications import PushResult
from ..models.routine import WorkoutRoutine
from .sse import SSEAccumulator

logger = logging.getLogger(__name__)


def _error_from(response: httpx.Response) -> FunctionCallError:
    message = f"Request failed with status {response.status_code}"
    code = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if isinstance(body.get("error"), str):
            message = body["error"]
        code = body.get("code")
    return FunctionCallError(message, response.status_code, code)


class CoachAPIClient:
    """
    Calls the ``/functions/v1`` endpoints with the user's access token.

    Usage:
        async with CoachAPIClient(settings) as api:
            routine = await api.generate_workout()
    """

    def __init__(
        self,
        settings: Settings,
        access_token: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.access_token = access_token or settings.cli_access_token
        self.http = http or httpx.AsyncClient(base_url=settings.functions_base_url, timeout=None)

    async def __aenter__(self) -> "CoachAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _post(self, path: str, payload: Optional[dict] = None) -> httpx.Response:
        response = await self.http.post(path, json=payload or {}, headers=self._headers())
        if response.status_code >= 400:
            raise _error_from(response)
        return response

    async def generate_workout(self) -> WorkoutRoutine:
        response = await self._post("/generate-workout")
        return WorkoutRoutine.from_dict(response.json()["routine"])

    async def stream_chat(
        self,
        messages: List[ChatMessage],
        context: Optional[UserContext] = None,
    ) -> AsyncIterator[str]:
        """Yield assistant text deltas as they arrive.

        Raises:
            FunctionCallError: The function rejected the request
            httpx.HTTPError: The stream broke off
        """
        payload = {
            "messages": [m.model_dump() for m in messages],
            "userContext": context.model_dump(by_alias=True) if context else None,
        }
        async with self.http.stream("POST", "/ai-coach", json=payload, headers=self._headers()) as response:
            if response.status_code >= 400:
                await response.aread()
                raise _error_from(response)

            accumulator = SSEAccumulator()
            async for chunk in response.aiter_bytes():
                for delta in accumulator.feed_bytes(chunk):
                    yield delta
                if accumulator.done:
                    break
            for delta in accumulator.flush():
                yield delta

    async def analyze_form(
        self,
        image_base64: str,
        exercise_name: Optional[str] = None,
        detailed: bool = False,
    ) -> FormAnalysis:
        response = await self._post(
            "/analyze-form",
            {"imageBase64": image_base64, "exerciseName": exercise_name, "detailed": detailed},
        )
        return FormAnalysis.from_dict(response.json())

    async def text_to_speech(self, text: str) -> bytes:
        response = await self._post("/tts-coach", {"text": text})
        return response.content

    async def speech_to_text(self, audio_base64: str, mime_type: str = "audio/webm") -> str:
        response = await self._post("/stt-coach", {"audio": audio_base64, "mimeType": mime_type})
        return response.json().get("text") or ""

    async def send_push(
        self,
        user_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        url: Optional[str] = None,
    ) -> PushResult:
        response = await self._post(
            "/send-push",
            {"userId": user_id, "title": title, "body": body, "url": url},
        )
        data = response.json()
        return PushResult(success=bool(data.get("success")), reason=data.get("reason"))
