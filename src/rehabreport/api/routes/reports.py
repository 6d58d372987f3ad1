"""Report endpoints — progress rollups, weekly snapshots and snapshot history."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.database import get_db
from rehabreport.reports.errors import ReportError
from rehabreport.reports.progress import build_progress_report
from rehabreport.reports.snapshots import list_snapshots
from rehabreport.reports.weekly import get_or_create_weekly_report
from rehabreport.schemas.report import ProgressReport, ReportSnapshotList, WeeklyReport

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/progress", response_model=ProgressReport)
async def get_progress_report(
    user_id: int,
    range_token: str = Query(default="7d", alias="range"),
    end_date: datetime | None = None,
    session: AsyncSession = Depends(get_db),
) -> ProgressReport:
    """Exercise, medication and pain rollup for the last 7, 14 or 30 days.

    `end_date` defaults to the end of today.
    """
    try:
        return await build_progress_report(session, user_id, range_token, end_date)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None


@router.get("/weekly", response_model=WeeklyReport)
async def get_weekly_report(
    user_id: int,
    week_start: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> WeeklyReport:
    """Weekly highlight report for the week starting at `week_start`.

    Defaults to the current week's Monday. The first request for a week
    stores the report; later requests return the stored copy.
    """
    try:
        return await get_or_create_weekly_report(session, user_id, week_start)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None


@router.get("/snapshots", response_model=ReportSnapshotList)
async def get_report_snapshots(
    user_id: int,
    period: str | None = None,
    limit: int | None = None,
    session: AsyncSession = Depends(get_db),
) -> ReportSnapshotList:
    """List stored report snapshots, newest first."""
    try:
        return await list_snapshots(session, user_id, period, limit)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None
