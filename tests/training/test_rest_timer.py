"""Tests for the rest countdown."""

import pytest

from coach_ai.training.rest_timer import RestTimer


class TestRestTimer:

    def test_idle_by_default(self):
        timer = RestTimer()
        assert timer.remaining is None
        assert timer.active is False
        assert timer.tick() is None

    def test_counts_down_and_clears(self):
        timer = RestTimer(3)
        assert timer.tick() == 2
        assert timer.tick() == 1
        assert timer.tick() is None
        assert timer.active is False

    def test_zero_rest_is_no_rest(self):
        timer = RestTimer()
        timer.start(0)
        assert timer.active is False

    def test_negative_rest(self):
        with pytest.raises(ValueError):
            RestTimer(-1)

    def test_skip(self):
        timer = RestTimer(60)
        timer.skip()
        assert timer.remaining is None
