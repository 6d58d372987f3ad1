"""Snapshot listing and the storage <-> schema mapping for report snapshots.

Snapshot rows keep the covered range, highlight and metrics as JSON text.
The highlight is stored JSON-encoded (a quoted string), so reads decode it
back to plain text.
"""

import json
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.config import get_settings
from rehabreport.models.report import ReportPeriod, ReportSnapshot
from rehabreport.reports.errors import InvalidRequestError, NotFoundError
from rehabreport.reports.store import find_snapshots_desc, find_user
from rehabreport.schemas.report import (
    DateRange,
    ReportSnapshotItem,
    ReportSnapshotList,
    WeeklyMetrics,
    WeeklyReport,
)

logger = logging.getLogger(__name__)


# ── Encoding ───────────────────────────────────────────────────────


def encode_range(start: date, end: date) -> str:
    return DateRange(start=start.isoformat(), end=end.isoformat()).model_dump_json()


def decode_range(text: str) -> DateRange:
    return DateRange.model_validate_json(text)


def encode_highlight(text: str) -> str:
    return json.dumps(text)


def decode_highlight(text: str | None) -> str | None:
    """Turn the stored JSON string back into plain text.

    Values that are not valid JSON strings are returned unchanged.
    """
    if text is None:
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        logger.error("Stored weekly highlight is not valid JSON: %r", text)
        return text
    return value if isinstance(value, str) else text


def encode_metrics(metrics: WeeklyMetrics) -> str:
    return metrics.model_dump_json(by_alias=True)


def decode_metrics(text: str | None) -> WeeklyMetrics | None:
    if not text:
        return None
    return WeeklyMetrics.model_validate_json(text)


def to_snapshot_item(snapshot: ReportSnapshot) -> ReportSnapshotItem:
    return ReportSnapshotItem(
        report_snapshot_id=snapshot.id,
        period=snapshot.period,
        covered_range=decode_range(snapshot.covered_range),
        weekly_highlight=decode_highlight(snapshot.weekly_highlight),
        metrics=decode_metrics(snapshot.metrics),
        recovery_prediction=snapshot.recovery_prediction,
        generated_at=snapshot.generated_at,
    )


def to_weekly_report(snapshot: ReportSnapshot) -> WeeklyReport:
    item = to_snapshot_item(snapshot)
    return WeeklyReport(
        **item.model_dump(),
        user_id=snapshot.user_id,
        created_at=snapshot.created_at,
    )


# ── Listing ────────────────────────────────────────────────────────


def parse_period(period: str | None) -> ReportPeriod | None:
    """Case-insensitive period filter; None or "" means no filter."""
    if not period:
        return None
    try:
        return ReportPeriod(period.upper())
    except ValueError:
        known = ", ".join(p.value for p in ReportPeriod)
        raise InvalidRequestError(
            f"Unsupported period {period!r}, expected one of: {known}"
        ) from None


async def list_snapshots(
    session: AsyncSession,
    user_id: int,
    period: str | None = None,
    limit: int | None = None,
) -> ReportSnapshotList:
    """List the user's snapshots newest first.

    ``limit`` falls back to the configured default when missing or not positive.
    """
    report_period = parse_period(period)
    page_size = (
        limit if limit is not None and limit > 0 else get_settings().default_snapshot_limit
    )
    logger.info(
        "Listing snapshots for user %s (period=%s, limit=%s)", user_id, report_period, page_size
    )

    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    snapshots = await find_snapshots_desc(
        session,
        user_id,
        report_period.value if report_period is not None else None,
        page_size,
    )
    items = [to_snapshot_item(s) for s in snapshots]
    return ReportSnapshotList(snapshots=items, total_count=len(items))
