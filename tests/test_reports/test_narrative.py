"""Tests for weekly highlight tiering and weekly metrics."""

from rehabreport.models.daily_summary import DailySummary
from rehabreport.reports.narrative import (
    ENCOURAGEMENT_MESSAGE,
    FULL_WEEK_MESSAGE,
    HIGH_CONSISTENCY_MESSAGE,
    MODERATE_PROGRESS_MESSAGE,
    NEAR_COMPLETE_MESSAGE,
    NO_DATA_MESSAGE,
    weekly_highlight,
    weekly_metrics,
)


def _week(*rates: int) -> list[DailySummary]:
    return [DailySummary(exercise_completion_rate=rate) for rate in rates]


class TestWeeklyHighlight:
    def test_no_summaries(self) -> None:
        assert weekly_highlight([]) == NO_DATA_MESSAGE

    def test_full_week(self) -> None:
        assert weekly_highlight(_week(100, 100, 100, 100, 100, 100, 100)) == FULL_WEEK_MESSAGE

    def test_five_active_days(self) -> None:
        message = weekly_highlight(_week(100, 90, 80, 85, 95, 10, 0))
        assert message == NEAR_COMPLETE_MESSAGE.format(days=5)
        assert "5 days" in message

    def test_six_active_days(self) -> None:
        assert weekly_highlight(_week(100, 100, 100, 100, 100, 100, 50)) == (
            NEAR_COMPLETE_MESSAGE.format(days=6)
        )

    def test_four_high_days_fall_to_high_consistency(self) -> None:
        message = weekly_highlight(_week(90, 90, 90, 90))
        assert message == HIGH_CONSISTENCY_MESSAGE
        assert message != NEAR_COMPLETE_MESSAGE.format(days=4)

    def test_moderate_progress(self) -> None:
        assert weekly_highlight(_week(60, 70, 50, 60)) == MODERATE_PROGRESS_MESSAGE

    def test_encouragement(self) -> None:
        assert weekly_highlight(_week(50, 20, 0)) == ENCOURAGEMENT_MESSAGE


class TestWeeklyMetrics:
    def test_counts_and_average(self) -> None:
        metrics = weekly_metrics(_week(100, 75, 50))
        assert metrics.total_days_with_records == 3
        assert metrics.avg_completion_rate == 75

    def test_empty(self) -> None:
        metrics = weekly_metrics([])
        assert metrics.total_days_with_records == 0
        assert metrics.avg_completion_rate == 0

    def test_serialized_keys(self) -> None:
        data = weekly_metrics(_week(81, 80)).model_dump(by_alias=True)
        assert data == {"totalDaysWithRecords": 2, "avgCompletionRate": 81}
