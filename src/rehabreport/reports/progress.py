"""Progress report builder — rolls daily summaries up over a 7/14/30 day window."""

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.models.daily_summary import DailySummary
from rehabreport.reports.errors import InvalidRequestError, NotFoundError
from rehabreport.reports.stats import mean, round_half_up
from rehabreport.reports.store import find_daily_summaries_between, find_user
from rehabreport.schemas.report import (
    DailyExerciseData,
    DailyMedicationData,
    DailyPainData,
    ExerciseStats,
    MedicationStats,
    PainStats,
    ProgressReport,
)

logger = logging.getLogger(__name__)

RANGE_DAYS = {"7d": 7, "14d": 14, "30d": 30}


def parse_range(range_token: str) -> int:
    """Map a range token ("7d", "14d", "30d") to its length in days."""
    days = RANGE_DAYS.get(range_token.lower()) if range_token else None
    if days is None:
        raise InvalidRequestError(
            f"Unsupported range {range_token!r}, expected one of: {', '.join(RANGE_DAYS)}"
        )
    return days


def report_window(days: int, end: datetime | None = None) -> tuple[datetime, datetime]:
    """Inclusive window of ``days`` calendar days ending at ``end`` (default: end of today)."""
    if end is None:
        end = datetime.combine(date.today(), time.max)
    start = datetime.combine(
        (end - timedelta(days=days - 1)).date(), time.min, tzinfo=end.tzinfo
    )
    return start, end


def _avg(values: Sequence[int | None]) -> int:
    value = mean(values)
    return round_half_up(value) if value is not None else 0


def _exercise_stats(
    summaries: Sequence[DailySummary], by_day: dict[date, DailySummary], days: list[date]
) -> ExerciseStats:
    daily_data = []
    for day in days:
        s = by_day.get(day)
        daily_data.append(
            DailyExerciseData(
                day=day,
                completion_rate=(s.exercise_completion_rate or 0) if s else 0,
                duration_sec=(s.total_duration_sec or 0) if s else 0,
            )
        )
    return ExerciseStats(
        avg_completion_rate=_avg([s.exercise_completion_rate for s in summaries]),
        total_duration_sec=sum(s.total_duration_sec or 0 for s in summaries),
        daily_data=daily_data,
    )


def _medication_stats(
    summaries: Sequence[DailySummary], by_day: dict[date, DailySummary], days: list[date]
) -> MedicationStats:
    daily_data = [
        DailyMedicationData(
            day=day,
            completion_rate=(by_day[day].medication_completion_rate or 0)
            if day in by_day
            else 0,
        )
        for day in days
    ]
    return MedicationStats(
        avg_completion_rate=_avg([s.medication_completion_rate for s in summaries]),
        daily_data=daily_data,
    )


def _pain_stats(
    summaries: Sequence[DailySummary], by_day: dict[date, DailySummary], days: list[date]
) -> PainStats:
    daily_data = [
        DailyPainData(
            day=day,
            avg_pain=(by_day[day].avg_pain_score or 0) if day in by_day else 0,
        )
        for day in days
    ]
    return PainStats(
        avg_pain_score=_avg([s.avg_pain_score for s in summaries]),
        daily_data=daily_data,
    )


async def build_progress_report(
    session: AsyncSession,
    user_id: int,
    range_token: str,
    end: datetime | None = None,
) -> ProgressReport:
    """Build the exercise/medication/pain rollup for the window ending at ``end``.

    Every daily series has exactly one entry per day of the window, in date
    order; days without a summary are reported as zero. Averages only use
    days that have a summary.

    Raises:
        InvalidRequestError: If ``range_token`` is not 7d, 14d or 30d.
        NotFoundError: If the user does not exist.
    """
    days = parse_range(range_token)
    start, end = report_window(days, end)
    logger.info(
        "Building %s progress report for user %s (%s to %s)", range_token, user_id, start, end
    )

    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    summaries = await find_daily_summaries_between(session, user_id, start.date(), end.date())
    if not summaries:
        logger.warning(
            "No daily summaries for user %s between %s and %s", user_id, start.date(), end.date()
        )

    by_day = {s.summary_date: s for s in summaries}
    window_days = [start.date() + timedelta(days=i) for i in range(days)]

    return ProgressReport(
        user_id=user_id,
        range=range_token.lower(),
        start_date=start,
        end_date=end,
        exercise_stats=_exercise_stats(summaries, by_day, window_days),
        medication_stats=_medication_stats(summaries, by_day, window_days),
        pain_stats=_pain_stats(summaries, by_day, window_days),
    )
