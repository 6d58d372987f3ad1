"""Weekly report cache — one materialized snapshot per user and exact week range."""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.models.report import ReportPeriod, ReportSnapshot
from rehabreport.reports.errors import NotFoundError
from rehabreport.reports.narrative import weekly_highlight, weekly_metrics
from rehabreport.reports.snapshots import (
    encode_highlight,
    encode_metrics,
    encode_range,
    to_weekly_report,
)
from rehabreport.reports.store import (
    find_daily_summaries_between,
    find_recovery_score,
    find_snapshot_by_range,
    find_user,
    insert_snapshot_if_absent,
)
from rehabreport.schemas.report import WeeklyReport

logger = logging.getLogger(__name__)


def current_week_start(today: date | None = None) -> date:
    """Return the Monday on or before ``today``."""
    today = today or date.today()
    return today - timedelta(days=today.weekday())


async def _build_snapshot(
    session: AsyncSession, user_id: int, start: date, end: date
) -> ReportSnapshot:
    summaries = await find_daily_summaries_between(session, user_id, start, end)
    prediction = await find_recovery_score(session, user_id, end)

    return ReportSnapshot(
        user_id=user_id,
        period=ReportPeriod.WEEKLY.value,
        range_start=start,
        range_end=end,
        covered_range=encode_range(start, end),
        weekly_highlight=encode_highlight(weekly_highlight(summaries)),
        metrics=encode_metrics(weekly_metrics(summaries)),
        recovery_prediction=prediction if prediction is not None else Decimal("0"),
        generated_at=datetime.utcnow(),
    )


async def get_or_create_weekly_report(
    session: AsyncSession, user_id: int, week_start: date | None = None
) -> WeeklyReport:
    """Return the weekly report for [week_start, week_start + 6 days].

    The snapshot for that exact range is served from the database when it
    exists; otherwise it is computed once from the week's daily summaries and
    stored. ``week_start`` defaults to the current week's Monday.

    Raises NotFoundError if the user does not exist.
    """
    start = week_start or current_week_start()
    end = start + timedelta(days=6)
    logger.info("Fetching weekly report for user %s, %s to %s", user_id, start, end)

    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    existing = await find_snapshot_by_range(
        session, user_id, ReportPeriod.WEEKLY.value, start, end
    )
    if existing is not None:
        logger.info("Weekly report cache hit: snapshot %s", existing.id)
        return to_weekly_report(existing)

    logger.info("Creating weekly report for user %s, %s to %s", user_id, start, end)
    snapshot = await _build_snapshot(session, user_id, start, end)
    snapshot, created = await insert_snapshot_if_absent(session, snapshot)
    if created:
        logger.info("Stored weekly report snapshot %s", snapshot.id)
    return to_weekly_report(snapshot)
