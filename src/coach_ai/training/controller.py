"""Training session controllers.

Controllers own the current ``TrainingState``, feed events through
``transition`` and persist the side effects (session row, set log, profile
progress). Persistence failures become notices; local progress is never
blocked or rolled back by them.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..db.repositories import ProfileRepository, RoutineRepository, SessionRepository
from ..exceptions import DatabaseError
from ..models.notice import Notice
from ..models.routine import WorkoutRoutine
from ..models.session import CompletedSet, WorkoutSession
from .catalog import SelectedExercise
from .state_machine import (
    ChooseContinue,
    ChooseRest,
    Event,
    Finish,
    PlannedExercise,
    SetCompleted,
    SkipRest,
    Tick,
    TogglePause,
    TrainingState,
    adjust_weight,
    format_weight,
    free_xp,
    initial_weight,
    progress_percent,
    routine_xp,
    start_state,
    transition,
)

logger = logging.getLogger(__name__)

LOAD_ERROR = "Error al cargar la rutina"
SAVE_ERROR = "Error al guardar el entrenamiento"
SET_ERROR = "Error al guardar la serie"
FREE_DONE = "¡Entrenamiento libre completado!"

_LEADING_INT = re.compile(r"\s*(\d+)")


def parse_reps(reps: str) -> int:
    """Leading integer of a reps prescription (``"8-10"`` -> 8), else 0."""
    match = _LEADING_INT.match(reps or "")
    return int(match.group(1)) if match else 0


@dataclass
class SessionSummary:
    duration_seconds: int
    xp_earned: int
    exercises_completed: int


class TrainingController:
    """Shared mechanics of routine and free sessions."""

    def __init__(self, user_id: str, sessions: SessionRepository, profiles: ProfileRepository):
        self.user_id = user_id
        self.sessions = sessions
        self.profiles = profiles
        self.plan: List[PlannedExercise] = []
        self.state = TrainingState()
        self.session: Optional[WorkoutSession] = None
        self.notices: List[Notice] = []
        self.summary: Optional[SessionSummary] = None
        self._weights: Dict[int, float] = {}

    # -------------------------------------------------------------------------
    # Mode specifics
    # -------------------------------------------------------------------------

    def xp_for(self, exercises_completed: int) -> int:
        raise NotImplementedError

    def reps_completed(self, exercise: PlannedExercise) -> Optional[int]:
        return None

    def _save_progress(self, xp: int) -> None:
        raise NotImplementedError

    def _on_finished(self) -> None:
        pass

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def current_exercise(self) -> Optional[PlannedExercise]:
        index = self.state.exercise_index
        return self.plan[index] if index is not None else None

    @property
    def current_weight(self) -> float:
        index = self.state.exercise_index
        if index is None:
            return 0.0
        if index not in self._weights:
            self._weights[index] = initial_weight(self.plan[index].weight_suggestion)
        return self._weights[index]

    @property
    def progress(self) -> float:
        return progress_percent(self.state, self.plan)

    @property
    def finished(self) -> bool:
        return self.state.finished

    def _notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _begin(self, plan: Sequence[PlannedExercise], routine_id: Optional[str]) -> None:
        self.plan = list(plan)
        self.state = start_state(self.plan)
        self._weights = {}
        self.summary = None
        try:
            self.session = self.sessions.start(self.user_id, routine_id)
        except DatabaseError as e:
            logger.error(f"Error creating workout session: {e.message}")
            self.session = None
            self._notify(Notice.error(LOAD_ERROR))

    def dispatch(self, event: Event) -> TrainingState:
        self.state = transition(self.state, event, self.plan)
        return self.state

    def adjust_weight(self, delta: float) -> float:
        index = self.state.exercise_index
        if index is None:
            return 0.0
        self._weights[index] = adjust_weight(self.current_weight, delta)
        return self._weights[index]

    def complete_set(self) -> TrainingState:
        """Log the current set, then advance.

        Finishing the last set of the last exercise completes the session.
        """
        exercise = self.current_exercise
        if exercise is None:
            return self.state

        # Raises InvalidTransition before anything is written
        next_state = transition(self.state, SetCompleted(), self.plan)

        if self.session is not None:
            try:
                self.sessions.log_set(
                    CompletedSet(
                        session_id=self.session.id,
                        exercise_name=exercise.name,
                        set_number=self.state.set_number,
                        reps_completed=self.reps_completed(exercise),
                        weight_used=format_weight(self.current_weight),
                    )
                )
            except DatabaseError as e:
                logger.error(f"Error logging set: {e.message}")
                self._notify(Notice.error(SET_ERROR))

        self.state = next_state
        if self.state.finished:
            self._complete()
        return self.state

    def choose_rest(self) -> TrainingState:
        return self.dispatch(ChooseRest())

    def choose_continue(self) -> TrainingState:
        return self.dispatch(ChooseContinue())

    def skip_rest(self) -> TrainingState:
        return self.dispatch(SkipRest())

    def tick(self) -> TrainingState:
        return self.dispatch(Tick())

    def toggle_pause(self) -> TrainingState:
        return self.dispatch(TogglePause())

    def finish(self) -> SessionSummary:
        """End the session now (the FIN button)."""
        if not self.state.finished:
            self.dispatch(Finish())
            self._complete()
        return self.summary

    def _complete(self) -> None:
        completed = self.state.exercises_completed
        xp = self.xp_for(completed)
        self.summary = SessionSummary(
            duration_seconds=self.state.elapsed_seconds,
            xp_earned=xp,
            exercises_completed=completed,
        )
        if self.session is None:
            self._notify(Notice.error(SAVE_ERROR))
            return
        try:
            self.sessions.complete(self.session.id, self.state.elapsed_seconds, xp)
            self._save_progress(xp)
        except DatabaseError as e:
            logger.error(f"Error finishing workout: {e.message}")
            self._notify(Notice.error(SAVE_ERROR))
            return
        logger.info(f"Session {self.session.id} completed: {completed} exercises, {xp} XP")
        self._on_finished()


class TrainingSessionController(TrainingController):
    """Guided session over the user's active routine."""

    def __init__(
        self,
        user_id: str,
        routines: RoutineRepository,
        sessions: SessionRepository,
        profiles: ProfileRepository,
    ):
        super().__init__(user_id, sessions, profiles)
        self.routines = routines
        self.routine: Optional[WorkoutRoutine] = None

    def load(self) -> Optional[WorkoutRoutine]:
        """Load the active routine and open a session for it.

        Returns None when there is no routine (or it could not be read).
        """
        try:
            self.routine = self.routines.get_active(self.user_id)
        except DatabaseError as e:
            logger.error(f"Error fetching routine: {e.message}")
            self._notify(Notice.error(LOAD_ERROR))
            return None
        if self.routine is None:
            return None

        plan = [
            PlannedExercise(
                name=exercise.name,
                sets=exercise.sets,
                reps=exercise.reps,
                rest_seconds=exercise.rest_seconds,
                weight_suggestion=exercise.weight_suggestion,
                notes=exercise.notes,
            )
            for exercise in self.routine.exercises
        ]
        self._begin(plan, self.routine.id)
        return self.routine

    def xp_for(self, exercises_completed: int) -> int:
        return routine_xp(exercises_completed)

    def _save_progress(self, xp: int) -> None:
        self.profiles.add_progress(self.user_id, xp, streak_increment=1)


class FreeTrainingController(TrainingController):
    """Session over exercises picked from the catalog, 90 s fixed rest."""

    def start(self, selected: Sequence[SelectedExercise]) -> None:
        if not selected:
            raise ValueError("Select at least one exercise")
        self._begin([exercise.to_planned() for exercise in selected], None)

    def xp_for(self, exercises_completed: int) -> int:
        return free_xp(exercises_completed)

    def reps_completed(self, exercise: PlannedExercise) -> Optional[int]:
        return parse_reps(exercise.reps)

    def _save_progress(self, xp: int) -> None:
        self.profiles.add_progress(self.user_id, xp)

    def _on_finished(self) -> None:
        self._notify(Notice.success(FREE_DONE))
