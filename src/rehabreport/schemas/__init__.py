from rehabreport.schemas.daily_summary import DailyMetrics, DailySummaryRead
from rehabreport.schemas.exercise_log import ExerciseLogCreate, ExerciseLogRead
from rehabreport.schemas.medication import (
    MedicationLogCreate,
    MedicationLogList,
    MedicationLogRead,
)
from rehabreport.schemas.report import (
    DailyExerciseData,
    DailyMedicationData,
    DailyPainData,
    DateRange,
    ExerciseStats,
    MedicationStats,
    PainStats,
    ProgressReport,
    ReportSnapshotItem,
    ReportSnapshotList,
    WeeklyMetrics,
    WeeklyReport,
)

__all__ = [
    "DailyExerciseData",
    "DailyMedicationData",
    "DailyMetrics",
    "DailyPainData",
    "DailySummaryRead",
    "DateRange",
    "ExerciseLogCreate",
    "ExerciseLogRead",
    "ExerciseStats",
    "MedicationLogCreate",
    "MedicationLogList",
    "MedicationLogRead",
    "MedicationStats",
    "PainStats",
    "ProgressReport",
    "ReportSnapshotItem",
    "ReportSnapshotList",
    "WeeklyMetrics",
    "WeeklyReport",
]
