from datetime import datetime

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from rehabreport.database import Base


class ExerciseLog(Base):
    __tablename__ = "exercise_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    plan_item_id: Mapped[int] = mapped_column(ForeignKey("plan_items.id"))
    performed_at: Mapped[datetime]

    completion_rate: Mapped[int | None] = mapped_column(default=None)  # 0-100
    pain_before: Mapped[int | None] = mapped_column(default=None)  # 0-10
    pain_after: Mapped[int | None] = mapped_column(default=None)  # 0-10
    duration_sec: Mapped[int | None] = mapped_column(default=None)
    rpe: Mapped[int | None] = mapped_column(default=None)  # perceived exertion, 1-10

    notes: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
