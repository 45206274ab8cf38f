"""Tests for VAPID signing and web push delivery."""

import os

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from conftest import USER_ID
from coach_ai.exceptions import PushNotConfiguredError
from coach_ai.models.notifications import PushSubscription
from coach_ai.services.push import (
    PushService,
    VapidSigner,
    b64url_decode,
    b64url_encode,
    load_vapid_private_key,
)

ENDPOINT = "https://push.example.com/send/abc123"


def raw_private_key(key: ec.EllipticCurvePrivateKey) -> str:
    return b64url_encode(key.private_numbers().private_value.to_bytes(32, "big"))


def browser_subscription() -> PushSubscription:
    """A subscription with real P-256 / auth keys so payloads can be encrypted."""
    receiver = ec.generate_private_key(ec.SECP256R1())
    p256dh = receiver.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    return PushSubscription(endpoint=ENDPOINT, p256dh=b64url_encode(p256dh), auth=b64url_encode(os.urandom(16)))


@pytest.fixture
def vapid_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def signer(vapid_key):
    return VapidSigner(vapid_key, "mailto:coach@example.com")


@pytest.fixture
def subscribed(notifications):
    subscription = browser_subscription()
    notifications.upsert(USER_ID, push_subscription=subscription.to_dict(), notifications_enabled=True)
    return subscription


def push_service(settings, notifications, signer, handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PushService(settings, notifications, signer=signer, http=http)


class TestVapid:

    def test_b64url_round_trip(self):
        assert b64url_decode(b64url_encode(b"\x00\xffcoach")) == b"\x00\xffcoach"

    def test_loads_raw_key(self, vapid_key):
        loaded = load_vapid_private_key(raw_private_key(vapid_key))
        assert loaded.private_numbers().private_value == vapid_key.private_numbers().private_value

    def test_loads_pem_key(self, vapid_key):
        pem = vapid_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ).decode()
        loaded = load_vapid_private_key(pem)
        assert loaded.private_numbers().private_value == vapid_key.private_numbers().private_value

    def test_rejects_short_raw_key(self):
        with pytest.raises(ValueError):
            load_vapid_private_key(b64url_encode(b"short"))

    def test_public_key_is_uncompressed_point(self, signer):
        assert len(b64url_decode(signer.public_key)) == 65

    def test_token_claims(self, signer, vapid_key):
        token = signer.token(ENDPOINT, now=1_700_000_000)
        claims = jwt.decode(
            token,
            vapid_key.public_key(),
            algorithms=["ES256"],
            audience="https://push.example.com",
            options={"verify_exp": False},
        )
        assert claims["sub"] == "mailto:coach@example.com"
        assert claims["exp"] == 1_700_000_000 + 12 * 60 * 60
        assert jwt.get_unverified_header(token)["typ"] == "JWT"

    def test_authorization_header(self, signer):
        header = signer.authorization(ENDPOINT)
        assert header.startswith("vapid t=")
        assert header.endswith(f", k={signer.public_key}")

    def test_from_settings_requires_key(self, settings):
        with pytest.raises(PushNotConfiguredError):
            VapidSigner.from_settings(settings)

    def test_from_settings(self, settings, vapid_key):
        settings.vapid_private_key = raw_private_key(vapid_key)
        signer = VapidSigner.from_settings(settings)
        assert signer.subject == settings.vapid_subject


class TestPushService:

    async def test_send_success(self, settings, notifications, signer, subscribed):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = request.content
            return httpx.Response(201)

        service = push_service(settings, notifications, signer, handler)
        result = await service.send(USER_ID, title="Coach IA para Ana", body="¡A entrenar!")

        assert result.success is True
        assert result.reason is None
        assert seen["url"] == ENDPOINT
        assert seen["headers"]["content-encoding"] == "aes128gcm"
        assert seen["headers"]["ttl"] == str(settings.push_ttl_seconds)
        assert seen["headers"]["authorization"].startswith("vapid t=")
        # Encrypted, so the plaintext never appears on the wire
        assert b"entrenar" not in seen["body"]
        assert notifications.get(USER_ID).last_notified_at is not None

    async def test_no_subscription(self, settings, notifications, signer):
        service = push_service(settings, notifications, signer, lambda request: httpx.Response(201))
        result = await service.send(USER_ID)
        assert result.success is False
        assert result.reason == "No subscription or disabled"

    async def test_disabled_subscription(self, settings, notifications, signer, subscribed):
        notifications.upsert(USER_ID, notifications_enabled=False)
        service = push_service(settings, notifications, signer, lambda request: httpx.Response(201))
        result = await service.send(USER_ID)
        assert result.reason == "No subscription or disabled"

    @pytest.mark.parametrize("status", [404, 410])
    async def test_gone_subscription_is_disabled(self, settings, notifications, signer, subscribed, status):
        service = push_service(settings, notifications, signer, lambda request: httpx.Response(status))
        result = await service.send(USER_ID)

        assert result.success is False
        prefs = notifications.get(USER_ID)
        assert prefs.push_subscription is None
        assert prefs.notifications_enabled is False

    async def test_other_rejection_keeps_subscription(self, settings, notifications, signer, subscribed):
        service = push_service(settings, notifications, signer, lambda request: httpx.Response(500, text="boom"))
        result = await service.send(USER_ID)

        assert result.success is False
        assert "500" in result.reason
        prefs = notifications.get(USER_ID)
        assert prefs.push_subscription == subscribed
        assert prefs.last_notified_at is None

    async def test_network_error(self, settings, notifications, signer, subscribed):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        service = push_service(settings, notifications, signer, handler)
        result = await service.send(USER_ID)
        assert result.success is False
        assert "unreachable" in result.reason

    async def test_missing_vapid_keys(self, settings, notifications, subscribed):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(201)))
        service = PushService(settings, notifications, http=http)
        with pytest.raises(PushNotConfiguredError):
            await service.send(USER_ID)
