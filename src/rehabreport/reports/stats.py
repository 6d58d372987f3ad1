"""Numeric helpers shared by the aggregator and the report builders."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from rehabreport.config import get_settings
from rehabreport.models.daily_summary import DailySummary

# Completion rate at which a single exercise log counts as completed and a
# day counts towards the streak.
STREAK_THRESHOLD = get_settings().streak_threshold


def mean(values: Iterable[int | float | None]) -> float | None:
    """Mean of the non-null values, or None when there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with 0.5 going up (``round`` uses banker's rounding)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_half_up_tenths(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def is_streak_day(summary: DailySummary) -> bool:
    rate = summary.exercise_completion_rate
    return rate is not None and rate >= STREAK_THRESHOLD
