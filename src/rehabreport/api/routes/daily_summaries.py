"""Daily summary endpoints — read and re-aggregate one day."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.database import get_db
from rehabreport.models.daily_summary import DailySummary
from rehabreport.reports.aggregator import aggregate_daily_summary, get_daily_summary
from rehabreport.reports.errors import ReportError
from rehabreport.schemas.daily_summary import DailySummaryRead

router = APIRouter(prefix="/api/daily-summaries", tags=["daily-summaries"])


@router.get("/{summary_date}", response_model=DailySummaryRead)
async def read_daily_summary(
    summary_date: date,
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> DailySummary:
    try:
        return await get_daily_summary(session, user_id, summary_date)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None


@router.post(
    "/{summary_date}/aggregate",
    response_model=DailySummaryRead,
    responses={204: {"description": "No exercise logs for that day"}},
)
async def aggregate_day(
    summary_date: date,
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> DailySummary | Response:
    """Recompute the daily summary from that day's exercise logs.

    Returns 204 when there is nothing to aggregate.
    """
    try:
        summary = await aggregate_daily_summary(session, user_id, summary_date)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None
    if summary is None:
        return Response(status_code=204)
    return summary
