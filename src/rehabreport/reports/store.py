"""Database queries and writes used by the report engine.

Everything the engine reads or writes goes through these functions, so the
aggregation and report modules never build SQL themselves.
"""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.models.daily_summary import DailySummary
from rehabreport.models.exercise_log import ExerciseLog
from rehabreport.models.plan import PlanItem
from rehabreport.models.recovery import RecoveryScore
from rehabreport.models.report import ReportSnapshot
from rehabreport.models.user import User

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return [start, next day start) for a calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


# ── Users, plans, logs ─────────────────────────────────────────────


async def find_user(session: AsyncSession, user_id: int) -> User | None:
    return await session.get(User, user_id)


async def find_exercise_logs(
    session: AsyncSession, user_id: int, day: date
) -> list[ExerciseLog]:
    """Exercise logs performed by the user on ``day``, oldest first."""
    start, end = day_bounds(day)
    stmt = (
        select(ExerciseLog)
        .where(
            ExerciseLog.user_id == user_id,
            ExerciseLog.performed_at >= start,
            ExerciseLog.performed_at < end,
        )
        .order_by(ExerciseLog.performed_at, ExerciseLog.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def find_plan_id(session: AsyncSession, plan_item_id: int) -> int | None:
    result = await session.execute(
        select(PlanItem.plan_id).where(PlanItem.id == plan_item_id)
    )
    return result.scalar_one_or_none()


async def count_plan_items(session: AsyncSession, plan_id: int) -> int:
    result = await session.execute(
        select(func.count(PlanItem.id)).where(PlanItem.plan_id == plan_id)
    )
    return result.scalar_one()


async def find_recovery_score(
    session: AsyncSession, user_id: int, day: date
) -> Decimal | None:
    result = await session.execute(
        select(RecoveryScore.daily_score).where(
            RecoveryScore.user_id == user_id,
            RecoveryScore.score_date == day,
        )
    )
    return result.scalar_one_or_none()


# ── Daily summaries ────────────────────────────────────────────────


async def find_daily_summary(
    session: AsyncSession, user_id: int, day: date
) -> DailySummary | None:
    result = await session.execute(
        select(DailySummary).where(
            DailySummary.user_id == user_id,
            DailySummary.summary_date == day,
        )
    )
    return result.scalar_one_or_none()


async def find_daily_summaries_between(
    session: AsyncSession, user_id: int, start: date, end: date
) -> list[DailySummary]:
    """Summaries with ``start <= summary_date <= end``, ascending by date."""
    stmt = (
        select(DailySummary)
        .where(
            DailySummary.user_id == user_id,
            DailySummary.summary_date >= start,
            DailySummary.summary_date <= end,
        )
        .order_by(DailySummary.summary_date)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


def _apply_fields(summary: DailySummary, fields: dict[str, Any]) -> None:
    for name, value in fields.items():
        setattr(summary, name, value)


async def upsert_daily_summary(
    session: AsyncSession, user_id: int, day: date, fields: dict[str, Any]
) -> DailySummary:
    """Create the (user, day) summary or replace the derived fields of the existing row.

    The existing row keeps its id. If another writer inserts the same
    (user, day) between our lookup and our insert, the unique constraint
    rejects ours and the winner's row is updated instead.
    """
    summary = await find_daily_summary(session, user_id, day)
    if summary is not None:
        _apply_fields(summary, fields)
        await session.commit()
        await session.refresh(summary)
        return summary

    summary = DailySummary(user_id=user_id, summary_date=day, **fields)
    session.add(summary)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.info(
            "Daily summary for user %s on %s was created concurrently, updating it",
            user_id,
            day,
        )
        summary = await find_daily_summary(session, user_id, day)
        if summary is None:
            raise
        _apply_fields(summary, fields)
        await session.commit()
        await session.refresh(summary)
        return summary

    await session.refresh(summary)
    return summary


# ── Report snapshots ───────────────────────────────────────────────


async def find_snapshot_by_range(
    session: AsyncSession, user_id: int, period: str, start: date, end: date
) -> ReportSnapshot | None:
    """Snapshot covering exactly [start, end]; overlapping ranges do not match."""
    result = await session.execute(
        select(ReportSnapshot).where(
            ReportSnapshot.user_id == user_id,
            ReportSnapshot.period == period,
            ReportSnapshot.range_start == start,
            ReportSnapshot.range_end == end,
        )
    )
    return result.scalar_one_or_none()


async def find_snapshots_desc(
    session: AsyncSession, user_id: int, period: str | None, limit: int
) -> list[ReportSnapshot]:
    """Newest snapshots first, optionally restricted to one period type."""
    stmt = select(ReportSnapshot).where(ReportSnapshot.user_id == user_id)
    if period is not None:
        stmt = stmt.where(ReportSnapshot.period == period)
    stmt = stmt.order_by(
        ReportSnapshot.generated_at.desc(), ReportSnapshot.id.desc()
    ).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def insert_snapshot_if_absent(
    session: AsyncSession, snapshot: ReportSnapshot
) -> tuple[ReportSnapshot, bool]:
    """Insert ``snapshot`` unless its exact range already exists.

    Returns (row, created). When a concurrent request wins the race the unique
    constraint rejects this insert and the winner's row is returned instead.
    """
    user_id = snapshot.user_id
    period = snapshot.period
    start = snapshot.range_start
    end = snapshot.range_end

    session.add(snapshot)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        existing = await find_snapshot_by_range(session, user_id, period, start, end)
        if existing is None:
            raise
        logger.info(
            "Lost snapshot race for user %s, %s %s..%s; returning snapshot %s",
            user_id,
            period,
            start,
            end,
            existing.id,
        )
        return existing, False

    await session.refresh(snapshot)
    return snapshot, True
