"""Tests for the free training exercise catalog."""

import pytest

from coach_ai.training.catalog import (
    EXERCISE_DATABASE,
    FREE_REST_SECONDS,
    MUSCLE_GROUPS,
    muscle_group_of,
    search_exercises,
    select_exercise,
)


class TestCatalog:

    def test_groups(self):
        assert MUSCLE_GROUPS == ("Pecho", "Espalda", "Hombros", "Bíceps", "Tríceps", "Piernas", "Core", "Cardio")

    def test_empty_query_returns_everything(self):
        assert search_exercises("   ") == EXERCISE_DATABASE

    def test_search_is_case_insensitive(self):
        assert search_exercises("PRESS") == {
            "Pecho": ["Press banca", "Press inclinado mancuernas", "Press declinado"],
            "Hombros": ["Press militar", "Press Arnold"],
            "Tríceps": ["Press francés", "Press cerrado"],
        }

    def test_search_without_matches(self):
        assert search_exercises("yoga") == {}

    def test_muscle_group_of(self):
        assert muscle_group_of("Peso muerto") == "Espalda"
        assert muscle_group_of("Peso muerto rumano") == "Piernas"
        assert muscle_group_of("Yoga") is None

    def test_select_exercise(self):
        selected = select_exercise("Hip thrust")
        planned = selected.to_planned()
        assert selected.muscle_group == "Piernas"
        assert (planned.sets, planned.reps, planned.rest_seconds) == (3, "12", FREE_REST_SECONDS)

    def test_select_unknown(self):
        with pytest.raises(KeyError):
            select_exercise("Yoga")
