from datetime import date, datetime

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rehabreport.database import Base


class DailySummary(Base):
    __tablename__ = "daily_summaries"
    __table_args__ = (
        UniqueConstraint("user_id", "summary_date", name="uq_daily_summary_user_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    summary_date: Mapped[date]

    # Exercise
    all_exercises_completed: Mapped[bool] = mapped_column(default=False)
    exercise_completion_rate: Mapped[int] = mapped_column(default=0)  # percent
    total_duration_sec: Mapped[int] = mapped_column(default=0)

    # Medication
    all_medications_taken: Mapped[bool] = mapped_column(default=False)
    medication_completion_rate: Mapped[int] = mapped_column(default=0)  # percent

    # Pain
    avg_pain_score: Mapped[int | None] = mapped_column(default=None)

    daily_metrics: Mapped[str | None] = mapped_column(Text, default=None)  # JSON

    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
