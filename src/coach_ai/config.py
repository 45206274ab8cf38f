"""Configuration settings for the Coach AI service."""

from pathlib import Path
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


# __file__ = src/coach_ai/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # CORS - the edge functions answered every origin
    cors_origins: list[str] = ["*"]

    # OpenAI-compatible AI gateway
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ai_gateway_api_key", "lovable_api_key"),
    )
    ai_model: str = "google/gemini-2.5-flash"

    # Database
    database_backend: Literal["sqlite", "supabase"] = "sqlite"
    database_path: Path | None = None
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_jwt_secret: str = ""

    # ElevenLabs voice
    elevenlabs_api_key: str = ""
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    elevenlabs_voice_id: str = "nPczCjzI2devNBz1zQrb"  # Brian
    elevenlabs_tts_model: str = "eleven_turbo_v2_5"
    elevenlabs_stt_model: str = "scribe_v1"

    # Web push (VAPID)
    vapid_public_key: str = ""
    vapid_private_key: str = ""
    vapid_subject: str = "mailto:coach@terminal-buddy.app"
    push_ttl_seconds: int = 86400

    # Reminder job
    reminder_scheduler_enabled: bool = False
    reminder_minute: int = 0

    # CLI client
    functions_base_url: str = "http://localhost:8000/functions/v1"
    cli_access_token: str = ""
    cli_user_id: str = ""

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.database_path is None:
            self.database_path = PROJECT_ROOT / "coach_ai.db"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
