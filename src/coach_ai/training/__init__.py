"""Guided and free training sessions."""

from .rest_timer import RestTimer
from .state_machine import (
    ChooseContinue,
    ChooseRest,
    ChoosingRest,
    Exercising,
    Finish,
    Finished,
    InvalidTransition,
    PlannedExercise,
    Resting,
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
    transition,
)
from .catalog import EXERCISE_DATABASE, SelectedExercise, search_exercises, select_exercise
from .controller import (
    FreeTrainingController,
    SessionSummary,
    TrainingSessionController,
)

__all__ = [
    "RestTimer",
    "ChooseContinue",
    "ChooseRest",
    "ChoosingRest",
    "Exercising",
    "Finish",
    "Finished",
    "InvalidTransition",
    "PlannedExercise",
    "Resting",
    "SetCompleted",
    "SkipRest",
    "Tick",
    "TogglePause",
    "TrainingState",
    "adjust_weight",
    "format_weight",
    "free_xp",
    "initial_weight",
    "progress_percent",
    "routine_xp",
    "transition",
    "EXERCISE_DATABASE",
    "SelectedExercise",
    "search_exercises",
    "select_exercise",
    "FreeTrainingController",
    "SessionSummary",
    "TrainingSessionController",
]
