"""Profile repository."""

from typing import Any, Optional

from .base import AdapterRepository
from ...models.profile import Profile


class ProfileRepository(AdapterRepository):
    """Reads and mutates rows of ``profiles`` (one per user)."""

    table = "profiles"

    def get(self, user_id: str) -> Optional[Profile]:
        with self._operation("get"):
            row = self.adapter.select_one(self.table, {"user_id": user_id})
        return Profile.from_dict(row) if row else None

    def create(self, user_id: str, full_name: Optional[str] = None) -> Profile:
        with self._operation("create"):
            row = self.adapter.insert(
                self.table,
                [{"user_id": user_id, "full_name": full_name, "streak_days": 0, "total_xp": 0}],
            )[0]
        return Profile.from_dict(row)

    def get_or_create(self, user_id: str, full_name: Optional[str] = None) -> Profile:
        return self.get(user_id) or self.create(user_id, full_name)

    def update(self, user_id: str, **fields: Any) -> Optional[Profile]:
        """Update the given columns; returns None when the user has no profile."""
        with self._operation("update"):
            rows = self.adapter.update(self.table, fields, {"user_id": user_id})
        return Profile.from_dict(rows[0]) if rows else None

    def add_progress(self, user_id: str, xp: int, streak_increment: int = 0) -> Optional[Profile]:
        """Add XP (and optionally streak days) to the profile.

        Read-modify-write over two calls, like the app always did; concurrent
        finishes for the same user can lose an increment.
        """
        profile = self.get(user_id)
        if profile is None:
            return None
        return self.update(
            user_id,
            total_xp=(profile.total_xp or 0) + xp,
            streak_days=(profile.streak_days or 0) + streak_increment,
        )
