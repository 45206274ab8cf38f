"""Routine repository: workout_routines and routine_exercises."""

from typing import List, Optional

from .base import AdapterRepository
from ...models.routine import RoutineExercise, WorkoutRoutine


class RoutineRepository(AdapterRepository):
    """Persistence for routines and their ordered exercises."""

    table = "workout_routines"
    exercises_table = "routine_exercises"

    def get(self, routine_id: str) -> Optional[WorkoutRoutine]:
        with self._operation("get"):
            row = self.adapter.select_one(self.table, {"id": routine_id})
        if not row:
            return None
        routine = WorkoutRoutine.from_dict(row)
        routine.exercises = self.list_exercises(routine_id)
        return routine

    def get_active(self, user_id: str) -> Optional[WorkoutRoutine]:
        """Most recent active routine with exercises sorted by order_index."""
        with self._operation("get_active"):
            rows = self.adapter.select(
                self.table,
                {"user_id": user_id, "is_active": True},
                order_by="created_at",
                descending=True,
                limit=1,
            )
        if not rows:
            return None
        routine = WorkoutRoutine.from_dict(rows[0])
        routine.exercises = self.list_exercises(routine.id)
        return routine

    def list_active(self, user_id: str) -> List[WorkoutRoutine]:
        with self._operation("list_active"):
            rows = self.adapter.select(self.table, {"user_id": user_id, "is_active": True})
        return [WorkoutRoutine.from_dict(row) for row in rows]

    def list_exercises(self, routine_id: str) -> List[RoutineExercise]:
        with self._operation("list_exercises"):
            rows = self.adapter.select(
                self.exercises_table,
                {"routine_id": routine_id},
                order_by="order_index",
            )
        return [RoutineExercise.from_dict(row) for row in rows]

    def deactivate_active(self, user_id: str) -> int:
        """Flag every active routine of the user inactive; returns the count."""
        with self._operation("deactivate_active"):
            rows = self.adapter.update(
                self.table,
                {"is_active": False},
                {"user_id": user_id, "is_active": True},
            )
        return len(rows)

    def create(self, routine: WorkoutRoutine, exercises: List[RoutineExercise]) -> WorkoutRoutine:
        """Insert the routine, then its exercises with order_index 0..n-1.

        Two separate writes; a failure after the first leaves a routine
        without exercises.
        """
        with self._operation("create"):
            row = self.adapter.insert(self.table, [routine.row()])[0]
        saved = WorkoutRoutine.from_dict(row)

        exercise_rows = []
        for index, exercise in enumerate(exercises):
            exercise_rows.append({
                "routine_id": saved.id,
                "name": exercise.name,
                "sets": exercise.sets,
                "reps": exercise.reps,
                "weight_suggestion": exercise.weight_suggestion or None,
                "rest_seconds": exercise.rest_seconds,
                "notes": exercise.notes or None,
                "order_index": index,
            })

        with self._operation("create_exercises"):
            stored = self.adapter.insert(self.exercises_table, exercise_rows)
        saved.exercises = sorted(
            (RoutineExercise.from_dict(r) for r in stored),
            key=lambda e: e.order_index,
        )
        return saved
