"""
AI gateway client.

Thin wrapper over an OpenAI-compatible chat completions endpoint:
- Single attempt per call (no retry/backoff)
- Upstream status classified into 429 / 402 / other, each mapped to a
  caller-supplied localized message
- Raw SSE relay for streaming chat
"""

from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional
import logging
import time

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from ..config import Settings
from ..exceptions import (
    AIGatewayError,
    AINotConfiguredError,
    AIPaymentRequiredError,
    AIRateLimitedError,
    AIServiceError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamMessages:
    """User-facing messages for the upstream failure classes."""

    rate_limited: str
    payment_required: str
    generic: str = "Error del servicio de IA"


def classify_status(status: int, messages: UpstreamMessages, details: Optional[Dict[str, Any]] = None) -> AIGatewayError:
    """Map an upstream HTTP status to the matching gateway error."""
    details = details or {}
    details.setdefault("upstream_status", status)
    if status == 429:
        return AIRateLimitedError(messages.rate_limited, details=details)
    if status == 402:
        return AIPaymentRequiredError(messages.payment_required, details=details)
    return AIServiceError(messages.generic, details=details)


class GatewayMetrics:
    """Track gateway usage."""

    def __init__(self) -> None:
        self.total_requests = 0
        self.failed_requests = 0
        self._request_times: list[float] = []

    def record(self, success: bool, duration_ms: Optional[float] = None) -> None:
        self.total_requests += 1
        if not success:
            self.failed_requests += 1
        if duration_ms is not None:
            self._request_times.append(duration_ms)
            # Keep only last 100 request times
            self._request_times = self._request_times[-100:]

    def to_dict(self) -> Dict[str, Any]:
        avg = sum(self._request_times) / len(self._request_times) if self._request_times else 0.0
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
            "avg_request_time_ms": round(avg, 2),
        }


class AIGatewayClient:
    """
    Client for the AI gateway.

    Usage:
        gateway = AIGatewayClient(settings)
        completion = await gateway.complete(messages, failures)
        stream = await gateway.open_stream(messages, failures)
        async for chunk in stream: ...
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None) -> None:
        """
        Args:
            settings: Application settings (gateway URL, key, model)
            client: Pre-built OpenAI client (tests)

        Raises:
            AINotConfiguredError: If no API key is configured
        """
        if client is None:
            if not settings.ai_gateway_api_key:
                raise AINotConfiguredError("lovable_api_key")
            client = AsyncOpenAI(
                api_key=settings.ai_gateway_api_key,
                base_url=settings.ai_gateway_url,
                max_retries=0,
            )
        self.client = client
        self.model = settings.ai_model
        self.metrics = GatewayMetrics()

    def _translate(self, error: Exception, failures: UpstreamMessages) -> AIGatewayError:
        if isinstance(error, APIStatusError):
            logger.error(f"AI gateway error: {error.status_code} {error.message}")
            return classify_status(error.status_code, failures)
        logger.error(f"AI gateway connection error: {error}")
        return AIServiceError(failures.generic, details={"reason": str(error)})

    async def complete(
        self,
        messages: List[Dict[str, Any]],
        failures: UpstreamMessages,
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[Dict[str, Any]] = None,
    ):
        """
        Run a non-streaming chat completion.

        Returns:
            The ``ChatCompletion`` object

        Raises:
            AIGatewayError: Classified upstream failure
        """
        kwargs: Dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            kwargs["tools"] = tools
        if tool_choice:
            kwargs["tool_choice"] = tool_choice

        start_time = time.time()
        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except (APIStatusError, APIConnectionError) as e:
            self.metrics.record(success=False)
            raise self._translate(e, failures) from e

        self.metrics.record(success=True, duration_ms=(time.time() - start_time) * 1000)
        return completion

    async def open_stream(
        self,
        messages: List[Dict[str, Any]],
        failures: UpstreamMessages,
    ) -> AsyncIterator[bytes]:
        """
        Start a streaming completion and return an iterator over the raw
        upstream SSE bytes.

        The upstream status is checked before this returns, so failures
        surface as errors instead of a broken stream.

        Raises:
            AIGatewayError: Classified upstream failure
        """
        stack = AsyncExitStack()
        try:
            response = await stack.enter_async_context(
                self.client.chat.completions.with_streaming_response.create(
                    model=self.model,
                    messages=messages,
                    stream=True,
                )
            )
        except (APIStatusError, APIConnectionError) as e:
            await stack.aclose()
            self.metrics.record(success=False)
            raise self._translate(e, failures) from e

        async def relay() -> AsyncIterator[bytes]:
            start_time = time.time()
            async with stack:
                async for chunk in response.iter_bytes():
                    yield chunk
            self.metrics.record(success=True, duration_ms=(time.time() - start_time) * 1000)

        return relay()

    def get_metrics(self) -> Dict[str, Any]:
        return self.metrics.to_dict()
