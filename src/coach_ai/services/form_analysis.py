"""Exercise form analysis with a vision model."""

import json
import logging
import re
from typing import Optional

from ..exceptions import ValidationError
from ..llm.gateway import AIGatewayClient, UpstreamMessages
from ..llm.prompts import build_form_messages
from ..models.form_analysis import AnalysisResult, Fallback, FormAnalysis, Parsed

logger = logging.getLogger(__name__)

FORM_FAILURES = UpstreamMessages(
    rate_limited="Límite de solicitudes excedido",
    payment_required="Créditos agotados",
)

# Greedy: from the first "{" to the last "}"
JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def parse_form_analysis(text: Optional[str]) -> AnalysisResult:
    """Extract the analysis JSON from free model text.

    Never raises: unusable output becomes a ``Fallback``.
    """
    if not text:
        return Fallback(reason="Empty response")

    match = JSON_BLOCK.search(text)
    if not match:
        return Fallback(reason="No JSON found in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return Fallback(reason=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return Fallback(reason="JSON is not an object")

    try:
        return Parsed(FormAnalysis.from_dict(data))
    except (KeyError, TypeError, ValueError) as e:
        return Fallback(reason=f"Unexpected analysis shape: {e}")


def strip_data_url(image_base64: str) -> str:
    """Accept both raw base64 and ``data:image/...;base64,`` URLs."""
    if image_base64.startswith("data:") and "," in image_base64:
        return image_base64.split(",", 1)[1]
    return image_base64


class FormAnalysisService:

    def __init__(self, gateway: AIGatewayClient):
        self.gateway = gateway

    async def analyze(
        self,
        image_base64: Optional[str],
        exercise_name: Optional[str] = None,
        detailed: bool = False,
    ) -> AnalysisResult:
        """
        Raises:
            ValidationError: No image was provided
            AIGatewayError: Classified upstream failure
        """
        if not image_base64:
            raise ValidationError("No image provided", field="imageBase64")

        logger.info(f"Analyzing exercise form for: {exercise_name} (detailed={detailed})")

        completion = await self.gateway.complete(
            build_form_messages(strip_data_url(image_base64), exercise_name, detailed),
            FORM_FAILURES,
        )
        content = completion.choices[0].message.content if completion.choices else None

        result = parse_form_analysis(content)
        if isinstance(result, Fallback):
            logger.warning(f"Form analysis fell back to default: {result.reason}")
        return result
