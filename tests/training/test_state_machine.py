"""Tests for the training state machine and derived values."""

import pytest

from coach_ai.training.state_machine import (
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
    start_state,
    transition,
)

PLAN = [
    PlannedExercise(name="Press banca", sets=2, reps="10", rest_seconds=60, weight_suggestion="50-60kg"),
    PlannedExercise(name="Remo con barra", sets=1, reps="12", rest_seconds=0),
]


def run(state, *events, plan=PLAN):
    for event in events:
        state = transition(state, event, plan)
    return state


class TestTransitions:

    def test_start_state(self):
        state = start_state(PLAN)
        assert state.phase == Exercising(0, 1)
        assert state.elapsed_seconds == 0

    def test_empty_plan_is_finished(self):
        assert start_state([]).phase == Finished(0)

    def test_set_completed_offers_rest(self):
        state = run(start_state(PLAN), SetCompleted())
        assert state.phase == ChoosingRest(0, 2, 60)
        assert state.completed == frozenset()

    def test_rest_counts_down_then_resumes(self):
        state = run(start_state(PLAN), SetCompleted(), ChooseRest())
        assert state.phase == Resting(0, 2, 60)

        for _ in range(59):
            state = transition(state, Tick(), PLAN)
        assert state.rest_remaining == 1
        # The session clock does not advance while resting
        assert state.elapsed_seconds == 0

        state = transition(state, Tick(), PLAN)
        assert state.phase == Exercising(0, 2)

    def test_skip_rest(self):
        state = run(start_state(PLAN), SetCompleted(), ChooseRest(), SkipRest())
        assert state.phase == Exercising(0, 2)

    def test_continue_without_rest(self):
        state = run(start_state(PLAN), SetCompleted(), ChooseContinue())
        assert state.phase == Exercising(0, 2)

    def test_last_set_moves_to_next_exercise(self):
        state = run(start_state(PLAN), SetCompleted(), ChooseContinue(), SetCompleted())
        assert state.completed == frozenset({0})
        # Rest before the next exercise uses the finished exercise's rest
        assert state.phase == ChoosingRest(1, 1, 60)

    def test_last_set_of_last_exercise_finishes(self):
        state = run(
            start_state(PLAN),
            SetCompleted(), ChooseContinue(), SetCompleted(), ChooseContinue(), SetCompleted(),
        )
        assert state.phase == Finished(2)
        assert state.finished is True
        assert state.exercise_index is None
        assert state.set_number is None

    def test_zero_rest_goes_straight_back(self):
        plan = [PlannedExercise(name="Plancha", sets=2, reps="30s", rest_seconds=0)]
        state = run(start_state(plan), SetCompleted(), ChooseRest(), plan=plan)
        assert state.phase == Exercising(0, 2)

    def test_finish_early(self):
        state = run(start_state(PLAN), SetCompleted(), ChooseContinue(), SetCompleted(), Finish())
        assert state.phase == Finished(1)

    def test_tick_advances_clock(self):
        state = run(start_state(PLAN), Tick(), Tick(), SetCompleted(), Tick())
        assert state.elapsed_seconds == 3

    def test_pause_stops_clock(self):
        state = run(start_state(PLAN), TogglePause(), Tick(), Tick())
        assert state.paused is True
        assert state.elapsed_seconds == 0
        state = run(state, TogglePause(), Tick())
        assert state.elapsed_seconds == 1

    def test_tick_after_finish_is_ignored(self):
        finished = TrainingState(phase=Finished(0), elapsed_seconds=10)
        assert transition(finished, Tick(), PLAN) == finished

    @pytest.mark.parametrize("event", [SetCompleted(), Finish(), TogglePause(), ChooseRest()])
    def test_events_after_finish_are_rejected(self, event):
        with pytest.raises(InvalidTransition):
            transition(TrainingState(phase=Finished(0)), event, PLAN)

    @pytest.mark.parametrize("event", [ChooseRest(), ChooseContinue(), SkipRest()])
    def test_rest_events_while_exercising_are_rejected(self, event):
        with pytest.raises(InvalidTransition):
            transition(start_state(PLAN), event, PLAN)

    def test_set_completed_while_choosing_is_rejected(self):
        state = run(start_state(PLAN), SetCompleted())
        with pytest.raises(InvalidTransition):
            transition(state, SetCompleted(), PLAN)


class TestDerivedValues:

    def test_xp(self):
        assert routine_xp(0) == 50
        assert routine_xp(3) == 80
        assert free_xp(0) == 25
        assert free_xp(2) == 35

    def test_progress(self):
        state = start_state(PLAN)
        assert progress_percent(state, PLAN) == pytest.approx(25.0)
        state = run(state, SetCompleted(), ChooseContinue())
        assert progress_percent(state, PLAN) == pytest.approx(50.0)
        state = run(state, SetCompleted(), ChooseContinue())
        assert progress_percent(state, PLAN) == pytest.approx(100.0)

    def test_progress_finished_and_empty(self):
        assert progress_percent(TrainingState(phase=Finished(2)), PLAN) == 100.0
        assert progress_percent(TrainingState(phase=Finished(0)), []) == 0.0

    @pytest.mark.parametrize(
        "suggestion,expected",
        [("50-60kg", 50.0), ("12 kg por mano", 12.0), ("peso corporal", 0.0), (None, 0.0), ("", 0.0)],
    )
    def test_initial_weight(self, suggestion, expected):
        assert initial_weight(suggestion) == expected

    def test_adjust_weight_floors_at_zero(self):
        assert adjust_weight(50.0, 2.5) == 52.5
        assert adjust_weight(1.0, -2.5) == 0.0

    def test_format_weight(self):
        assert format_weight(50.0) == "50 kg"
        assert format_weight(52.5) == "52.5 kg"
        assert format_weight(0) == "0 kg"
