"""Daily summary aggregation — folds one day of exercise logs into a DailySummary."""

import asyncio
import logging
import weakref
from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.models.daily_summary import DailySummary
from rehabreport.models.exercise_log import ExerciseLog
from rehabreport.reports.errors import NotFoundError
from rehabreport.reports.stats import (
    STREAK_THRESHOLD,
    mean,
    round_half_up,
    round_half_up_tenths,
)
from rehabreport.reports.store import (
    count_plan_items,
    find_daily_summary,
    find_exercise_logs,
    find_plan_id,
    find_user,
    upsert_daily_summary,
)
from rehabreport.schemas.daily_summary import DailyMetrics

logger = logging.getLogger(__name__)

# One lock per (user_id, day) while an aggregation for that key is running.
_summary_locks: "weakref.WeakValueDictionary[tuple[int, date], asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


def _lock_for(user_id: int, day: date) -> asyncio.Lock:
    key = (user_id, day)
    lock = _summary_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _summary_locks[key] = lock
    return lock


def summarize_logs(logs: Sequence[ExerciseLog], total_exercises: int) -> dict[str, Any]:
    """Compute the derived DailySummary fields for one day of logs.

    ``total_exercises`` is the number of items in the day's plan. A log counts
    as completed when its completion rate reaches STREAK_THRESHOLD.
    """
    completed = sum(
        1
        for log in logs
        if log.completion_rate is not None and log.completion_rate >= STREAK_THRESHOLD
    )
    completion_rate = (
        min(100, (completed * 100) // total_exercises) if total_exercises > 0 else 0
    )

    avg_pain = mean(log.pain_after for log in logs)
    avg_rpe = mean(log.rpe for log in logs)
    metrics = DailyMetrics(
        total_exercises=total_exercises,
        completed_exercises=completed,
        avg_rpe=round_half_up_tenths(avg_rpe) if avg_rpe is not None else 0.0,
    )

    return {
        "all_exercises_completed": total_exercises > 0 and completed == total_exercises,
        "exercise_completion_rate": completion_rate,
        # TODO: derive from MedicationLog once medication schedules record expected doses
        "all_medications_taken": False,
        "medication_completion_rate": 0,
        "avg_pain_score": round_half_up(avg_pain) if avg_pain is not None else 0,
        "total_duration_sec": sum(
            log.duration_sec for log in logs if log.duration_sec is not None
        ),
        "daily_metrics": metrics.model_dump_json(by_alias=True),
    }


async def aggregate_daily_summary(
    session: AsyncSession, user_id: int, day: date
) -> DailySummary | None:
    """Recompute the user's DailySummary for ``day`` from their exercise logs.

    The expected exercise count comes from the plan of the day's first log;
    all logs of one day are assumed to belong to the same active plan.

    Returns the upserted summary, or None when the user logged nothing that
    day (an existing summary is left untouched in that case).

    Raises NotFoundError if the user does not exist.
    """
    logger.info("Aggregating daily summary for user %s on %s", user_id, day)

    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    async with _lock_for(user_id, day):
        logs = await find_exercise_logs(session, user_id, day)
        if not logs:
            logger.warning(
                "No exercise logs for user %s on %s, daily summary not updated",
                user_id,
                day,
            )
            return None

        plan_id = await find_plan_id(session, logs[0].plan_item_id)
        total_exercises = (
            await count_plan_items(session, plan_id) if plan_id is not None else 0
        )

        fields = summarize_logs(logs, total_exercises)
        summary = await upsert_daily_summary(session, user_id, day, fields)

    logger.info(
        "Daily summary %s updated for user %s on %s (%s%% exercises completed)",
        summary.id,
        user_id,
        day,
        summary.exercise_completion_rate,
    )
    return summary


async def get_daily_summary(
    session: AsyncSession, user_id: int, day: date
) -> DailySummary:
    """Return the stored summary for (user, day). Raises NotFoundError if absent."""
    summary = await find_daily_summary(session, user_id, day)
    if summary is None:
        raise NotFoundError(f"No daily summary for user {user_id} on {day}")
    return summary
