"""Web push delivery with VAPID (RFC 8292) and aes128gcm payloads (RFC 8291)."""

import base64
import json
import logging
import time
from typing import Optional
from urllib.parse import urlsplit

import httpx
import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from pywebpush import WebPusher

from ..config import Settings
from ..db.repositories import NotificationRepository
from ..exceptions import PushDeliveryError, PushNotConfiguredError
from ..models.notifications import PushPayload, PushResult, PushSubscription

logger = logging.getLogger(__name__)

VAPID_TOKEN_LIFETIME = 12 * 60 * 60

# Push services answer these when the subscription no longer exists
GONE_STATUSES = {404, 410}


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def load_vapid_private_key(value: str) -> ec.EllipticCurvePrivateKey:
    """Load a P-256 key from PEM or from the base64url raw 32-byte scalar
    printed by the usual ``web-push generate-vapid-keys`` tools."""
    value = value.strip()
    if value.startswith("-----BEGIN"):
        key = serialization.load_pem_private_key(value.encode(), password=None)
        if not isinstance(key, ec.EllipticCurvePrivateKey) or not isinstance(key.curve, ec.SECP256R1):
            raise ValueError("VAPID key must be an EC P-256 private key")
        return key
    raw = b64url_decode(value)
    if len(raw) != 32:
        raise ValueError(f"VAPID private key must be 32 bytes, got {len(raw)}")
    return ec.derive_private_key(int.from_bytes(raw, "big"), ec.SECP256R1())


class VapidSigner:
    """Signs VAPID tokens with ES256."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey, subject: str):
        self.private_key = private_key
        self.subject = subject
        public_bytes = private_key.public_key().public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.UncompressedPoint,
        )
        self.public_key = b64url_encode(public_bytes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "VapidSigner":
        if not settings.vapid_private_key:
            raise PushNotConfiguredError()
        signer = cls(load_vapid_private_key(settings.vapid_private_key), settings.vapid_subject)
        if settings.vapid_public_key and settings.vapid_public_key != signer.public_key:
            logger.warning("VAPID_PUBLIC_KEY does not match the private key; using the derived key")
        return signer

    def token(self, endpoint: str, now: Optional[float] = None) -> str:
        parts = urlsplit(endpoint)
        claims = {
            "aud": f"{parts.scheme}://{parts.netloc}",
            "exp": int(now if now is not None else time.time()) + VAPID_TOKEN_LIFETIME,
            "sub": self.subject,
        }
        return jwt.encode(claims, self.private_key, algorithm="ES256", headers={"typ": "JWT"})

    def authorization(self, endpoint: str) -> str:
        return f"vapid t={self.token(endpoint)}, k={self.public_key}"


class PushService:
    """Sends notifications to a user's stored push subscription."""

    def __init__(
        self,
        settings: Settings,
        notifications: NotificationRepository,
        signer: Optional[VapidSigner] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.notifications = notifications
        self._signer = signer
        self.http = http or httpx.AsyncClient()

    @property
    def signer(self) -> VapidSigner:
        if self._signer is None:
            self._signer = VapidSigner.from_settings(self.settings)
        return self._signer

    async def deliver(self, subscription: PushSubscription, payload: PushPayload) -> None:
        """Encrypt and POST one message.

        Raises:
            PushDeliveryError: The push service did not accept the message
        """
        data = json.dumps(payload.to_dict(), ensure_ascii=False).encode("utf-8")
        encoded = WebPusher(subscription.to_dict()).encode(data, content_encoding="aes128gcm")

        response = await self.http.post(
            subscription.endpoint,
            content=encoded["body"],
            headers={
                "Authorization": self.signer.authorization(subscription.endpoint),
                "Content-Encoding": "aes128gcm",
                "Content-Type": "application/octet-stream",
                "TTL": str(self.settings.push_ttl_seconds),
            },
        )
        if response.status_code >= 300:
            raise PushDeliveryError(response.status_code, response.text)

    async def send(
        self,
        user_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        url: Optional[str] = None,
    ) -> PushResult:
        """Send to the user's subscription and record ``last_notified_at`` on success."""
        preferences = self.notifications.get(user_id)
        if not preferences or not preferences.push_subscription or not preferences.notifications_enabled:
            return PushResult(success=False, reason="No subscription or disabled")

        payload = PushPayload(
            title=title or "Coach IA",
            body=body or "¡Es hora de entrenar!",
            url=url or "/training",
        )

        try:
            await self.deliver(preferences.push_subscription, payload)
        except PushDeliveryError as e:
            logger.error(f"Push send failed for user {user_id}: {e.push_status}")
            if e.push_status in GONE_STATUSES:
                logger.info(f"Subscription for user {user_id} expired, disabling notifications")
                self.notifications.upsert(user_id, push_subscription=None, notifications_enabled=False)
            return PushResult(success=False, reason=e.message)
        except httpx.HTTPError as e:
            logger.error(f"Error sending push to user {user_id}: {e}")
            return PushResult(success=False, reason=str(e))

        logger.info(f"Push notification sent to user {user_id}")
        self.notifications.mark_notified(user_id)
        return PushResult(success=True)

    async def aclose(self) -> None:
        await self.http.aclose()
