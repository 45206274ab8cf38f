"""Authentication dependency for FastAPI.

Requests carry the Supabase access token as ``Authorization: Bearer``.
Tokens are verified locally with the project's JWT secret.
Server-to-server calls (push delivery, the reminder cron) carry the
project service key instead.
"""

import hmac
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...config import Settings, get_settings
from ...exceptions import AuthenticationError

SUPABASE_AUDIENCE = "authenticated"

security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """The authenticated Supabase user."""

    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def id(self) -> str:
        return self.user_id


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Raises:
        AuthenticationError: Missing secret, bad signature, expired or wrong audience
    """
    if not settings.supabase_jwt_secret:
        raise AuthenticationError()
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=SUPABASE_AUDIENCE,
        )
    except jwt.InvalidTokenError:
        raise AuthenticationError()
    if not payload.get("sub"):
        raise AuthenticationError()
    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """FastAPI dependency returning the user behind the bearer token.

    Raises:
        AuthenticationError (401): "No authorization header" or "Unauthorized"
    """
    if credentials is None:
        raise AuthenticationError("No authorization header")

    payload = decode_access_token(credentials.credentials, settings)
    return CurrentUser(
        user_id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role"),
    )


async def require_service_key(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """FastAPI dependency admitting only callers holding the service key.

    Raises:
        AuthenticationError (401): "No authorization header" or "Unauthorized"
    """
    if credentials is None:
        raise AuthenticationError("No authorization header")

    expected = settings.supabase_service_key
    if not expected or not hmac.compare_digest(
        credentials.credentials.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AuthenticationError()
