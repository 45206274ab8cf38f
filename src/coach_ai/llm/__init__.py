"""AI gateway client and prompt construction."""

from .gateway import AIGatewayClient, UpstreamMessages, classify_status
from .context_builder import build_coach_system_prompt

__all__ = [
    "AIGatewayClient",
    "UpstreamMessages",
    "classify_status",
    "build_coach_system_prompt",
]
