"""Recording exercise and medication logs.

Recording a log refreshes the day's DailySummary as a side effect. That
refresh is best-effort: if it fails the log is still recorded and the
failure is only logged.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rehabreport.models.exercise_log import ExerciseLog
from rehabreport.models.medication import Medication, MedicationLog
from rehabreport.models.plan import PlanItem, RehabPlan
from rehabreport.reports.aggregator import aggregate_daily_summary
from rehabreport.reports.errors import NotFoundError
from rehabreport.reports.store import day_bounds, find_user
from rehabreport.schemas.exercise_log import ExerciseLogCreate, ExerciseLogRead
from rehabreport.schemas.medication import (
    MedicationLogCreate,
    MedicationLogList,
    MedicationLogRead,
)

logger = logging.getLogger(__name__)


async def _refresh_daily_summary(session: AsyncSession, user_id: int, day: date) -> None:
    try:
        await aggregate_daily_summary(session, user_id, day)
    except Exception:
        await session.rollback()
        logger.exception("Daily summary update failed for user %s on %s", user_id, day)


async def record_exercise_log(
    session: AsyncSession, user_id: int, payload: ExerciseLogCreate
) -> ExerciseLogRead:
    """Store an exercise log, then refresh the DailySummary for its day.

    Raises NotFoundError if the user or the plan item (within one of the
    user's plans) does not exist.
    """
    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    stmt = (
        select(PlanItem)
        .join(RehabPlan, RehabPlan.id == PlanItem.plan_id)
        .where(PlanItem.id == payload.plan_item_id, RehabPlan.user_id == user_id)
    )
    result = await session.execute(stmt)
    if result.scalar_one_or_none() is None:
        raise NotFoundError(f"Plan item {payload.plan_item_id} not found")

    log = ExerciseLog(user_id=user_id, **payload.model_dump())
    session.add(log)
    await session.commit()
    await session.refresh(log)
    logger.info("Recorded exercise log %s for user %s", log.id, user_id)

    recorded = ExerciseLogRead.model_validate(log)
    await _refresh_daily_summary(session, user_id, log.performed_at.date())
    return recorded


async def record_medication_log(
    session: AsyncSession, user_id: int, payload: MedicationLogCreate
) -> MedicationLogRead:
    """Store a medication log, then refresh the DailySummary for its day.

    Raises NotFoundError if the user or the user's medication does not exist.
    """
    if await find_user(session, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    result = await session.execute(
        select(Medication).where(
            Medication.id == payload.medication_id,
            Medication.user_id == user_id,
        )
    )
    medication = result.scalar_one_or_none()
    if medication is None:
        raise NotFoundError(f"Medication {payload.medication_id} not found")

    log = MedicationLog(user_id=user_id, **payload.model_dump())
    session.add(log)
    await session.commit()
    await session.refresh(log)
    logger.info("Recorded medication log %s for user %s", log.id, user_id)

    recorded = MedicationLogRead.model_validate(log)
    recorded.medication_name = medication.name
    await _refresh_daily_summary(session, user_id, log.taken_at.date())
    return recorded


async def list_medication_logs(
    session: AsyncSession, user_id: int, day: date
) -> MedicationLogList:
    """Medication logs taken on ``day``, in the order they were taken."""
    start, end = day_bounds(day)
    stmt = (
        select(MedicationLog, Medication.name)
        .join(Medication, Medication.id == MedicationLog.medication_id)
        .where(
            MedicationLog.user_id == user_id,
            MedicationLog.taken_at >= start,
            MedicationLog.taken_at < end,
        )
        .order_by(MedicationLog.taken_at, MedicationLog.id)
    )
    result = await session.execute(stmt)

    logs = []
    for log, medication_name in result.all():
        item = MedicationLogRead.model_validate(log)
        item.medication_name = medication_name
        logs.append(item)
    return MedicationLogList(day=day, logs=logs)
