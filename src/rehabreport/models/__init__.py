from rehabreport.models.daily_summary import DailySummary
from rehabreport.models.exercise_log import ExerciseLog
from rehabreport.models.medication import Medication, MedicationLog
from rehabreport.models.plan import PlanItem, RehabPlan
from rehabreport.models.recovery import RecoveryScore
from rehabreport.models.report import ReportPeriod, ReportSnapshot
from rehabreport.models.user import User

__all__ = [
    "DailySummary",
    "ExerciseLog",
    "Medication",
    "MedicationLog",
    "PlanItem",
    "RecoveryScore",
    "RehabPlan",
    "ReportPeriod",
    "ReportSnapshot",
    "User",
]
