"""Tests for the AI gateway client and prompt construction."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APIStatusError

from coach_ai.exceptions import (
    AINotConfiguredError,
    AIPaymentRequiredError,
    AIRateLimitedError,
    AIServiceError,
)
from coach_ai.llm.gateway import AIGatewayClient, UpstreamMessages, classify_status
from coach_ai.llm.prompts import build_form_messages, build_routine_messages

FAILURES = UpstreamMessages(rate_limited="Demasiadas", payment_required="Sin créditos")


def status_error(status: int) -> APIStatusError:
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    response = httpx.Response(status, request=request, json={"error": {"message": "upstream"}})
    return APIStatusError("upstream", response=response, body=None)


class TestClassifyStatus:

    def test_rate_limited(self):
        error = classify_status(429, FAILURES)
        assert isinstance(error, AIRateLimitedError)
        assert error.status_code == 429
        assert error.message == "Demasiadas"

    def test_payment_required(self):
        error = classify_status(402, FAILURES)
        assert isinstance(error, AIPaymentRequiredError)
        assert error.status_code == 402
        assert error.message == "Sin créditos"

    @pytest.mark.parametrize("status", [400, 500, 503])
    def test_other_statuses(self, status):
        error = classify_status(status, FAILURES)
        assert isinstance(error, AIServiceError)
        assert error.status_code == 500
        assert error.details["upstream_status"] == status


class TestAIGatewayClient:

    def test_requires_api_key(self, settings):
        settings.ai_gateway_api_key = ""
        with pytest.raises(AINotConfiguredError):
            AIGatewayClient(settings)

    async def test_complete_passes_tools(self, settings):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value="completion")
        gateway = AIGatewayClient(settings, client=client)

        result = await gateway.complete(
            [{"role": "user", "content": "hola"}],
            FAILURES,
            tools=[{"type": "function"}],
            tool_choice={"type": "function"},
        )
        assert result == "completion"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == settings.ai_model
        assert kwargs["tools"] == [{"type": "function"}]
        assert gateway.get_metrics()["total_requests"] == 1

    async def test_complete_translates_status(self, settings):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=status_error(402))
        gateway = AIGatewayClient(settings, client=client)

        with pytest.raises(AIPaymentRequiredError):
            await gateway.complete([{"role": "user", "content": "hola"}], FAILURES)
        assert gateway.get_metrics()["failed_requests"] == 1


class TestPrompts:

    def test_routine_messages_without_weight(self):
        messages = build_routine_messages("Ganar fuerza", "Avanzado")
        assert "Ganar fuerza" in messages[0]["content"]
        assert "peso corporal" not in messages[0]["content"]
        assert "Avanzado" in messages[1]["content"]

    def test_form_messages_default_exercise(self):
        messages = build_form_messages("QUJD", None)
        assert '"ejercicio"' in messages[0]["content"]
        assert "bodyPoints" not in messages[0]["content"]
        assert messages[1]["content"][1]["text"].startswith("Analiza la forma de este ejercicio: ejercicio de gimnasio")
