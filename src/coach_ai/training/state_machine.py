"""Training session progression as a closed set of states.

``transition`` is the single authority for how a session moves between
sets, rest and completion. States and events are immutable; a controller
owns the current state and persists the side effects.
"""

import re
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Sequence, Union

from .rest_timer import RestTimer

ROUTINE_BASE_XP = 50
ROUTINE_XP_PER_EXERCISE = 10
FREE_BASE_XP = 25
FREE_XP_PER_EXERCISE = 5

WEIGHT_STEP = 2.5

_FIRST_NUMBER = re.compile(r"(\d+)")


@dataclass(frozen=True)
class PlannedExercise:
    """What the state machine needs to know about one exercise."""
    name: str
    sets: int
    reps: str
    rest_seconds: int
    weight_suggestion: Optional[str] = None
    muscle_group: Optional[str] = None
    notes: Optional[str] = None


# =============================================================================
# States
# =============================================================================

@dataclass(frozen=True)
class Exercising:
    exercise_index: int
    set_number: int = 1


@dataclass(frozen=True)
class ChoosingRest:
    """Waiting for the user to pick rest or continue."""
    exercise_index: int
    set_number: int
    rest_seconds: int


@dataclass(frozen=True)
class Resting:
    exercise_index: int
    set_number: int
    remaining: int


@dataclass(frozen=True)
class Finished:
    exercises_completed: int


Phase = Union[Exercising, ChoosingRest, Resting, Finished]


@dataclass(frozen=True)
class TrainingState:
    phase: Phase = field(default_factory=lambda: Exercising(0))
    completed: FrozenSet[int] = frozenset()
    elapsed_seconds: int = 0
    paused: bool = False

    @property
    def finished(self) -> bool:
        return isinstance(self.phase, Finished)

    @property
    def exercise_index(self) -> Optional[int]:
        if self.finished:
            return None
        return self.phase.exercise_index

    @property
    def set_number(self) -> Optional[int]:
        if self.finished:
            return None
        return self.phase.set_number

    @property
    def rest_remaining(self) -> Optional[int]:
        return self.phase.remaining if isinstance(self.phase, Resting) else None

    @property
    def exercises_completed(self) -> int:
        return len(self.completed)


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class SetCompleted:
    pass


@dataclass(frozen=True)
class ChooseRest:
    pass


@dataclass(frozen=True)
class ChooseContinue:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SkipRest:
    pass


@dataclass(frozen=True)
class TogglePause:
    pass


@dataclass(frozen=True)
class Finish:
    pass


Event = Union[SetCompleted, ChooseRest, ChooseContinue, Tick, SkipRest, TogglePause, Finish]


class InvalidTransition(ValueError):
    """The event is not accepted in the current phase."""

    def __init__(self, phase: Phase, event: Event):
        self.phase = phase
        self.event = event
        super().__init__(f"{type(event).__name__} is not valid while {type(phase).__name__}")


def start_state(plan: Sequence[PlannedExercise]) -> TrainingState:
    if not plan:
        return TrainingState(phase=Finished(0))
    return TrainingState()


def transition(state: TrainingState, event: Event, plan: Sequence[PlannedExercise]) -> TrainingState:
    """Return the state after ``event``.

    Raises:
        InvalidTransition: The event does not apply to the current phase
    """
    phase = state.phase

    if isinstance(event, Tick):
        if isinstance(phase, Resting):
            timer = RestTimer(phase.remaining)
            timer.tick()
            if timer.remaining is None:
                return replace(state, phase=Exercising(phase.exercise_index, phase.set_number))
            return replace(state, phase=replace(phase, remaining=timer.remaining))
        if isinstance(phase, Finished) or state.paused:
            return state
        return replace(state, elapsed_seconds=state.elapsed_seconds + 1)

    if isinstance(phase, Finished):
        raise InvalidTransition(phase, event)

    if isinstance(event, Finish):
        return replace(state, phase=Finished(len(state.completed)))

    if isinstance(event, TogglePause):
        return replace(state, paused=not state.paused)

    if isinstance(event, SetCompleted):
        if not isinstance(phase, Exercising):
            raise InvalidTransition(phase, event)
        exercise = plan[phase.exercise_index]
        if phase.set_number < exercise.sets:
            return replace(
                state,
                phase=ChoosingRest(phase.exercise_index, phase.set_number + 1, exercise.rest_seconds),
            )
        completed = state.completed | {phase.exercise_index}
        if phase.exercise_index >= len(plan) - 1:
            return replace(state, completed=completed, phase=Finished(len(completed)))
        # Rest before the next exercise uses the finished exercise's rest
        return replace(
            state,
            completed=completed,
            phase=ChoosingRest(phase.exercise_index + 1, 1, exercise.rest_seconds),
        )

    if isinstance(event, ChooseRest):
        if not isinstance(phase, ChoosingRest):
            raise InvalidTransition(phase, event)
        timer = RestTimer(phase.rest_seconds)
        if timer.remaining is None:
            return replace(state, phase=Exercising(phase.exercise_index, phase.set_number))
        return replace(state, phase=Resting(phase.exercise_index, phase.set_number, timer.remaining))

    if isinstance(event, ChooseContinue):
        if not isinstance(phase, ChoosingRest):
            raise InvalidTransition(phase, event)
        return replace(state, phase=Exercising(phase.exercise_index, phase.set_number))

    if isinstance(event, SkipRest):
        if not isinstance(phase, Resting):
            raise InvalidTransition(phase, event)
        return replace(state, phase=Exercising(phase.exercise_index, phase.set_number))

    raise InvalidTransition(phase, event)


# =============================================================================
# Derived values
# =============================================================================

def routine_xp(exercises_completed: int) -> int:
    return ROUTINE_BASE_XP + ROUTINE_XP_PER_EXERCISE * exercises_completed


def free_xp(exercises_completed: int) -> int:
    return FREE_BASE_XP + FREE_XP_PER_EXERCISE * exercises_completed


def progress_percent(state: TrainingState, plan: Sequence[PlannedExercise]) -> float:
    """completed/total x 100 + set/sets x (100/total)."""
    total = len(plan)
    if total == 0:
        return 0.0
    if state.finished:
        return 100.0
    exercise = plan[state.exercise_index]
    sets = exercise.sets or 1
    return len(state.completed) / total * 100 + state.set_number / sets * (100 / total)


def initial_weight(weight_suggestion: Optional[str]) -> float:
    """First whole number of a suggestion such as ``"50-60kg"``; 0 without one."""
    match = _FIRST_NUMBER.search(weight_suggestion or "")
    return float(match.group(1)) if match else 0.0


def adjust_weight(current: float, delta: float) -> float:
    return max(0.0, current + delta)


def format_weight(weight: float) -> str:
    """Render as logged in ``completed_sets.weight_used``."""
    value = int(weight) if float(weight).is_integer() else weight
    return f"{value} kg"
