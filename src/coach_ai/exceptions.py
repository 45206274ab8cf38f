"""
Custom exceptions for the Coach AI service.

Every exception carries:
- A user-facing message (Spanish where it reaches the app)
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"

    # AI gateway errors
    AI_RATE_LIMITED = "AI_RATE_LIMITED"
    AI_PAYMENT_REQUIRED = "AI_PAYMENT_REQUIRED"
    AI_SERVICE_ERROR = "AI_SERVICE_ERROR"
    AI_NOT_CONFIGURED = "AI_NOT_CONFIGURED"
    ROUTINE_GENERATION_FAILED = "ROUTINE_GENERATION_FAILED"

    # Voice errors
    VOICE_SERVICE_ERROR = "VOICE_SERVICE_ERROR"

    # Push errors
    PUSH_NOT_CONFIGURED = "PUSH_NOT_CONFIGURED"
    PUSH_DELIVERY_FAILED = "PUSH_DELIVERY_FAILED"

    # Data errors
    DATABASE_ERROR = "DATABASE_ERROR"


class CoachAIError(Exception):
    """
    Base exception for all Coach AI errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response.

        The app reads ``error`` as display text, so it stays a plain string.
        """
        result: Dict[str, Any] = {
            "error": self.message,
            "code": self.code.value,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Request Errors (400/401/404)
# ============================================================================

class ValidationError(CoachAIError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class AuthenticationError(CoachAIError):
    """Raised when the bearer token is missing or invalid."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class NotFoundError(CoachAIError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=f"{resource_type} with ID '{resource_id}' not found",
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


# ============================================================================
# AI Gateway Errors (402/429/500)
# ============================================================================

class AIGatewayError(CoachAIError):
    """Base class for failures of the upstream AI gateway."""

    def __init__(
        self,
        message: str = "Error del servicio de IA",
        code: ErrorCode = ErrorCode.AI_SERVICE_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details,
        )


class AIRateLimitedError(AIGatewayError):
    """Upstream answered 429."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.AI_RATE_LIMITED,
            status_code=429,
            details=details,
        )


class AIPaymentRequiredError(AIGatewayError):
    """Upstream answered 402 (credits exhausted)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.AI_PAYMENT_REQUIRED,
            status_code=402,
            details=details,
        )


class AIServiceError(AIGatewayError):
    """Any other upstream failure."""


class AINotConfiguredError(AIGatewayError):
    """Raised when the gateway API key is missing."""

    def __init__(self, setting: str = "ai_gateway_api_key") -> None:
        super().__init__(
            message=f"{setting.upper()} is not configured",
            code=ErrorCode.AI_NOT_CONFIGURED,
            status_code=500,
            details={"configuration_missing": setting},
        )


class RoutineGenerationError(AIGatewayError):
    """Raised when the model returned no usable routine."""

    def __init__(
        self,
        message: str = "No se pudo generar la rutina",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.ROUTINE_GENERATION_FAILED,
            status_code=500,
            details=details,
        )


# ============================================================================
# Voice / Push Errors
# ============================================================================

class VoiceServiceError(CoachAIError):
    """Raised when the text-to-speech or transcription provider fails."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.VOICE_SERVICE_ERROR,
            status_code=status_code,
            details=details,
        )


class PushNotConfiguredError(CoachAIError):
    """Raised when VAPID keys are missing."""

    def __init__(self, message: str = "VAPID keys are not configured") -> None:
        super().__init__(
            message=message,
            code=ErrorCode.PUSH_NOT_CONFIGURED,
            status_code=500,
        )


class PushDeliveryError(CoachAIError):
    """Raised when the push service rejects a message."""

    def __init__(
        self,
        status: int,
        body: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["push_status"] = status
        if body:
            error_details["push_response"] = body[:300]
        super().__init__(
            message=f"Push service rejected the message ({status})",
            code=ErrorCode.PUSH_DELIVERY_FAILED,
            status_code=502,
            details=error_details,
        )
        self.push_status = status


# ============================================================================
# Database Errors
# ============================================================================

class DatabaseError(CoachAIError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Client Errors
# ============================================================================

class FunctionCallError(CoachAIError):
    """Raised by the API client when a function answers with an error body."""

    def __init__(self, message: str, status_code: int, code: Optional[str] = None) -> None:
        try:
            error_code = ErrorCode(code) if code else ErrorCode.INTERNAL_ERROR
        except ValueError:
            error_code = ErrorCode.INTERNAL_ERROR
        super().__init__(
            message=message,
            code=error_code,
            status_code=status_code,
        )
