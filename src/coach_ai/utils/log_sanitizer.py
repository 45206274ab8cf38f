"""Logging filter that keeps tokens, keys and personal data out of log output.

Redacts, before a record is emitted:
- Supabase access tokens and other JWTs
- Bearer and VAPID authorization headers
- AI gateway and ElevenLabs API keys
- Push subscription endpoints (they are capability URLs)
- E-mail addresses
- Inline base64 image/audio payloads

Usage:
    from coach_ai.utils.log_sanitizer import install_log_sanitizer

    install_log_sanitizer()
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log messages."""

    # Order matters - more specific patterns come before general ones
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # Data URLs carrying camera frames or recorded audio
        (re.compile(r'data:(image|audio)/[a-z0-9.+-]+;base64,[A-Za-z0-9+/=]+', re.IGNORECASE), r'data:\1/[REDACTED_BASE64]'),

        # JWTs (Supabase access tokens, VAPID tokens)
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+'), '[REDACTED_JWT]'),

        # VAPID authorization header
        (re.compile(r'vapid\s+t=[^,\s]+', re.IGNORECASE), 'vapid t=[REDACTED_TOKEN]'),

        # Bearer tokens
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),

        # ElevenLabs key header
        (re.compile(r'(xi-api-key["\']?\s*[:=]\s*["\']?)[^"\'&\s,]+', re.IGNORECASE), r'\1[REDACTED]'),

        # OpenAI style keys (sk-...)
        (re.compile(r'\bsk-[a-zA-Z0-9_-]{20,}'), '[REDACTED_API_KEY]'),

        # Push service endpoints
        (re.compile(r'https://(fcm\.googleapis\.com|updates\.push\.services\.mozilla\.com|[a-z0-9.-]*\.notify\.windows\.com|web\.push\.apple\.com)/\S+', re.IGNORECASE), r'https://\1/[REDACTED_ENDPOINT]'),

        # Key/secret fields in various formats
        (re.compile(r'(api_key["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(private_key["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(secret["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(auth["\']?\s*[:=]\s*["\']?)[A-Za-z0-9_-]{16,}', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(p256dh["\']?\s*[:=]\s*["\']?)[A-Za-z0-9_-]{40,}', re.IGNORECASE), r'\1[REDACTED]'),

        # Password fields
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Email addresses
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; always lets it through."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        if record.args:
            record.args = self._sanitize_args(record.args)

        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments."""
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            # Keep the original object when nothing was redacted
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: str | None = None) -> None:
    """Install the log sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
        return

    root_logger = logging.getLogger()
    if any(isinstance(f, LogSanitizationFilter) for f in root_logger.filters):
        return
    root_logger.addFilter(sanitizer)
    for handler in root_logger.handlers:
        handler.addFilter(sanitizer)


def sanitize_string(text: str) -> str:
    """Sanitize a string without going through the logging system."""
    return LogSanitizationFilter()._sanitize(text)
