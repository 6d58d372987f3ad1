"""Weekly highlight text and metrics derived from one week of daily summaries."""

from collections.abc import Sequence

from rehabreport.models.daily_summary import DailySummary
from rehabreport.reports.stats import is_streak_day, mean, round_half_up
from rehabreport.schemas.report import WeeklyMetrics

HIGH_CONSISTENCY_RATE = 80
MODERATE_PROGRESS_RATE = 60

NO_DATA_MESSAGE = "No activity was recorded this week. Let's get started next week!"
FULL_WEEK_MESSAGE = "7 days in a row! Consistent habits are what drive recovery."
NEAR_COMPLETE_MESSAGE = "You completed your exercises on {days} days this week. Almost there!"
HIGH_CONSISTENCY_MESSAGE = "You're keeping a high completion rate. Keep it up!"
MODERATE_PROGRESS_MESSAGE = "Good progress. A little more consistency will go a long way!"
ENCOURAGEMENT_MESSAGE = "Let's push a little harder next week. You've got this!"


def weekly_highlight(summaries: Sequence[DailySummary]) -> str:
    """Pick the highlight message for a week; the first matching tier wins."""
    if not summaries:
        return NO_DATA_MESSAGE

    active_days = sum(1 for s in summaries if is_streak_day(s))
    avg_rate = mean(s.exercise_completion_rate for s in summaries) or 0.0

    if active_days == 7:
        return FULL_WEEK_MESSAGE
    if active_days >= 5:
        return NEAR_COMPLETE_MESSAGE.format(days=active_days)
    if avg_rate >= HIGH_CONSISTENCY_RATE:
        return HIGH_CONSISTENCY_MESSAGE
    if avg_rate >= MODERATE_PROGRESS_RATE:
        return MODERATE_PROGRESS_MESSAGE
    return ENCOURAGEMENT_MESSAGE


def weekly_metrics(summaries: Sequence[DailySummary]) -> WeeklyMetrics:
    avg_rate = mean(s.exercise_completion_rate for s in summaries)
    return WeeklyMetrics(
        total_days_with_records=len(summaries),
        avg_completion_rate=round_half_up(avg_rate) if avg_rate is not None else 0,
    )
