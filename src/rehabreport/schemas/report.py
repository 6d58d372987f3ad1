from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DateRange(BaseModel):
    start: str
    end: str


class WeeklyMetrics(BaseModel):
    total_days_with_records: int = 0
    avg_completion_rate: int = 0

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ── Progress report ────────────────────────────────────────────────


class DailyExerciseData(BaseModel):
    day: date
    completion_rate: int
    duration_sec: int


class DailyMedicationData(BaseModel):
    day: date
    completion_rate: int


class DailyPainData(BaseModel):
    day: date
    avg_pain: int


class ExerciseStats(BaseModel):
    avg_completion_rate: int
    total_duration_sec: int
    daily_data: list[DailyExerciseData]


class MedicationStats(BaseModel):
    avg_completion_rate: int
    daily_data: list[DailyMedicationData]


class PainStats(BaseModel):
    avg_pain_score: int
    daily_data: list[DailyPainData]


class ProgressReport(BaseModel):
    user_id: int
    range: str
    start_date: datetime
    end_date: datetime
    exercise_stats: ExerciseStats
    medication_stats: MedicationStats
    pain_stats: PainStats


# ── Snapshots ──────────────────────────────────────────────────────


class ReportSnapshotItem(BaseModel):
    report_snapshot_id: int
    period: str
    covered_range: DateRange
    weekly_highlight: str | None = None
    metrics: WeeklyMetrics | None = None
    recovery_prediction: Decimal
    generated_at: datetime


class WeeklyReport(ReportSnapshotItem):
    user_id: int
    created_at: datetime


class ReportSnapshotList(BaseModel):
    snapshots: list[ReportSnapshotItem]
    total_count: int
