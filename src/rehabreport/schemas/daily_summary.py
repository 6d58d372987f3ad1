import logging
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class DailyMetrics(BaseModel):
    """Derived per-day figures stored as JSON on the summary row."""

    total_exercises: int = 0
    completed_exercises: int = 0
    avg_rpe: float = 0.0

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class DailySummaryRead(BaseModel):
    id: int
    user_id: int
    summary_date: date
    all_exercises_completed: bool
    exercise_completion_rate: int
    all_medications_taken: bool
    medication_completion_rate: int
    avg_pain_score: int | None = None
    total_duration_sec: int
    daily_metrics: DailyMetrics | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("daily_metrics", mode="before")
    @classmethod
    def _decode_metrics(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return DailyMetrics.model_validate_json(value)
            except ValidationError:
                logger.error("Stored daily metrics are not valid: %r", value)
                return None
        return value
