"""Exercise log endpoint — recording a log also refreshes the day's summary."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.database import get_db
from rehabreport.reports.errors import ReportError
from rehabreport.reports.logs import record_exercise_log
from rehabreport.schemas.exercise_log import ExerciseLogCreate, ExerciseLogRead

router = APIRouter(prefix="/api/exercise-logs", tags=["exercise-logs"])


@router.post("", response_model=ExerciseLogRead, status_code=201)
async def create_exercise_log(
    payload: ExerciseLogCreate,
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> ExerciseLogRead:
    try:
        return await record_exercise_log(session, user_id, payload)
    except ReportError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from None
