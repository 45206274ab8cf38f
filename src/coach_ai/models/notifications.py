"""Push notification preference and payload models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


WEEK_DAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")
TRAINING_TIMES = tuple(f"{hour:02d}:00" for hour in range(6, 23))

DEFAULT_TRAINING_DAYS = ["lunes", "miércoles", "viernes"]
DEFAULT_TRAINING_TIME = "18:00"


@dataclass
class PushSubscription:
    """Browser ``PushSubscription.toJSON()`` as stored by the app."""
    endpoint: str
    p256dh: str
    auth: str
    expiration_time: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "expirationTime": self.expiration_time,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PushSubscription":
        keys = data.get("keys") or {}
        return cls(
            endpoint=data["endpoint"],
            p256dh=keys["p256dh"],
            auth=keys["auth"],
            expiration_time=data.get("expirationTime"),
        )


@dataclass
class NotificationPreferences:
    """One row of ``user_notifications``."""
    user_id: str
    notifications_enabled: bool = False
    push_subscription: Optional[PushSubscription] = None
    preferred_training_time: str = DEFAULT_TRAINING_TIME
    training_days: List[str] = field(default_factory=lambda: list(DEFAULT_TRAINING_DAYS))
    last_notified_at: Optional[str] = None
    id: Optional[str] = None

    @property
    def preferred_hour(self) -> int:
        return int(self.preferred_training_time.split(":")[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "notifications_enabled": self.notifications_enabled,
            "push_subscription": self.push_subscription.to_dict() if self.push_subscription else None,
            "preferred_training_time": self.preferred_training_time,
            "training_days": list(self.training_days),
            "last_notified_at": self.last_notified_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationPreferences":
        subscription = data.get("push_subscription")
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            notifications_enabled=bool(data.get("notifications_enabled")),
            push_subscription=PushSubscription.from_dict(subscription) if subscription else None,
            preferred_training_time=data.get("preferred_training_time") or DEFAULT_TRAINING_TIME,
            training_days=list(data.get("training_days") or []),
            last_notified_at=data.get("last_notified_at"),
        )


@dataclass
class PushPayload:
    """Notification payload delivered to the service worker."""
    title: str = "Coach IA"
    body: str = "¡Es hora de entrenar!"
    url: str = "/training"
    icon: str = "/favicon.ico"
    tag: str = "coach-reminder"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "url": self.url,
            "icon": self.icon,
            "tag": self.tag,
        }


@dataclass
class PushResult:
    """Outcome of a send-push call."""
    success: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.reason:
            data["reason"] = self.reason
        return data
