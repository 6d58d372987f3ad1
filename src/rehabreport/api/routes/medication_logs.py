"""Medication log endpoints — record a dose and list a day's doses."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.database import get_db
from rehabreport.reports.errors import ReportError
from rehabreport.reports.logs import list_medication_logs, record_medication_log
from rehabreport.schemas.medication import (
    MedicationLogCreate,
    MedicationLogList,
    MedicationLogRead,
)

router = APIRouter(prefix="/api/medication-logs", tags=["medication-logs"])


@router.post("", response_model=MedicationLogRead, status_code=201)
async def create_medication_log(
    payload: MedicationLogCreate,
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> MedicationLogRead:
    try:
        return await record_medication_log(session, user_id, payload)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None


@router.get("", response_model=MedicationLogList)
async def get_medication_logs(
    user_id: int,
    day: date = Query(alias="date"),
    session: AsyncSession = Depends(get_db),
) -> MedicationLogList:
    """List medication logs taken on a given date (YYYY-MM-DD)."""
    return await list_medication_logs(session, user_id, day)
