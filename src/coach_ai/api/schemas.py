"""
Request and response schemas for the coach functions.

Field names follow the JSON the app sends (camelCase where it does).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.chat import ChatMessage, UserContext


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(CamelModel):
    messages: List[ChatMessage] = Field(..., description="Conversation so far")
    user_context: Optional[UserContext] = Field(None, alias="userContext")


class AnalyzeFormRequest(CamelModel):
    image_base64: Optional[str] = Field(None, alias="imageBase64", description="JPEG as base64 or data URL")
    exercise_name: Optional[str] = Field(None, alias="exerciseName")
    detailed: bool = False


class TTSRequest(BaseModel):
    text: Optional[str] = None


class STTRequest(CamelModel):
    audio: Optional[str] = Field(None, description="Base64 encoded recording")
    mime_type: str = Field("audio/webm", alias="mimeType")


class STTResponse(BaseModel):
    text: str


class SendPushRequest(CamelModel):
    user_id: Optional[str] = Field(None, alias="userId")
    title: Optional[str] = None
    body: Optional[str] = None
    url: Optional[str] = None


class PushResponse(BaseModel):
    success: bool
    reason: Optional[str] = None


class ReminderRunResponse(CamelModel):
    success: bool
    notifications_sent: int = Field(..., alias="notificationsSent")
