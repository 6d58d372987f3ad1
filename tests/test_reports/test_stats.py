"""Tests for numeric report helpers."""

from rehabreport.models.daily_summary import DailySummary
from rehabreport.reports.stats import (
    is_streak_day,
    mean,
    round_half_up,
    round_half_up_tenths,
)


class TestMean:
    def test_ignores_none(self) -> None:
        assert mean([2, None, 4]) == 3.0

    def test_empty_is_none(self) -> None:
        assert mean([]) is None
        assert mean([None, None]) is None


class TestRoundHalfUp:
    def test_half_goes_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_below_half_goes_down(self) -> None:
        assert round_half_up(4.49) == 4

    def test_tenths(self) -> None:
        assert round_half_up_tenths(7.25) == 7.3
        assert round_half_up_tenths(6.666666) == 6.7


class TestStreakDay:
    def test_threshold_is_inclusive(self) -> None:
        assert is_streak_day(DailySummary(exercise_completion_rate=80))
        assert not is_streak_day(DailySummary(exercise_completion_rate=79))
