"""Session repository: workout_sessions and completed_sets."""

from datetime import datetime
from typing import List, Optional

from .base import AdapterRepository, utc_now
from ...models.session import CompletedSet, WorkoutSession


class SessionRepository(AdapterRepository):
    """Persistence for training sessions and their append-only set log."""

    table = "workout_sessions"
    sets_table = "completed_sets"

    def start(self, user_id: str, routine_id: Optional[str] = None) -> WorkoutSession:
        with self._operation("start"):
            row = self.adapter.insert(
                self.table,
                [{
                    "user_id": user_id,
                    "routine_id": routine_id,
                    "started_at": utc_now().isoformat(),
                }],
            )[0]
        return WorkoutSession.from_dict(row)

    def log_set(self, completed_set: CompletedSet) -> CompletedSet:
        with self._operation("log_set"):
            row = self.adapter.insert(
                self.sets_table,
                [{
                    "session_id": completed_set.session_id,
                    "exercise_name": completed_set.exercise_name,
                    "set_number": completed_set.set_number,
                    "reps_completed": completed_set.reps_completed,
                    "weight_used": completed_set.weight_used,
                }],
            )[0]
        return CompletedSet.from_dict(row)

    def complete(
        self,
        session_id: str,
        duration_seconds: int,
        xp_earned: int,
        completed_at: Optional[datetime] = None,
    ) -> Optional[WorkoutSession]:
        completed_at = completed_at or utc_now()
        with self._operation("complete"):
            rows = self.adapter.update(
                self.table,
                {
                    "completed_at": completed_at.isoformat(),
                    "duration_seconds": duration_seconds,
                    "xp_earned": xp_earned,
                },
                {"id": session_id},
            )
        return WorkoutSession.from_dict(rows[0]) if rows else None

    def last_completed(self, user_id: str) -> Optional[WorkoutSession]:
        with self._operation("last_completed"):
            rows = self.adapter.select(
                self.table,
                {"user_id": user_id},
                not_null=("completed_at",),
                order_by="completed_at",
                descending=True,
                limit=1,
            )
        return WorkoutSession.from_dict(rows[0]) if rows else None

    def completed_since(self, user_id: str, since: datetime) -> List[WorkoutSession]:
        with self._operation("completed_since"):
            rows = self.adapter.select(
                self.table,
                {"user_id": user_id},
                not_null=("completed_at",),
                since=("completed_at", since.isoformat()),
                order_by="completed_at",
            )
        return [WorkoutSession.from_dict(row) for row in rows]

    def sets_for_session(self, session_id: str) -> List[CompletedSet]:
        with self._operation("sets_for_session"):
            rows = self.adapter.select(
                self.sets_table,
                {"session_id": session_id},
                order_by="completed_at",
            )
        return [CompletedSet.from_dict(row) for row in rows]
