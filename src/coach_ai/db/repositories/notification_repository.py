"""Notification preferences repository (``user_notifications``)."""

from datetime import datetime
from typing import Any, List, Optional

from .base import AdapterRepository, utc_now
from ...models.notifications import NotificationPreferences


class NotificationRepository(AdapterRepository):

    table = "user_notifications"

    def get(self, user_id: str) -> Optional[NotificationPreferences]:
        with self._operation("get"):
            row = self.adapter.select_one(self.table, {"user_id": user_id})
        return NotificationPreferences.from_dict(row) if row else None

    def deliverable(self) -> List[NotificationPreferences]:
        """Rows with notifications enabled and a stored subscription."""
        with self._operation("deliverable"):
            rows = self.adapter.select(
                self.table,
                {"notifications_enabled": True},
                not_null=("push_subscription",),
            )
        return [NotificationPreferences.from_dict(row) for row in rows]

    def upsert(self, user_id: str, **fields: Any) -> NotificationPreferences:
        """Insert or update the user's row, keyed on user_id."""
        row = {"user_id": user_id, **fields}
        with self._operation("upsert"):
            stored = self.adapter.upsert(self.table, row, on_conflict="user_id")
        return NotificationPreferences.from_dict(stored)

    def mark_notified(self, user_id: str, when: Optional[datetime] = None) -> None:
        when = when or utc_now()
        with self._operation("mark_notified"):
            self.adapter.update(
                self.table,
                {"last_notified_at": when.isoformat()},
                {"user_id": user_id},
            )
