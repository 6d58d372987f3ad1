from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rehabreport.database import Base


class RecoveryScore(Base):
    """Precomputed recovery prediction, written by the scoring pipeline."""

    __tablename__ = "recovery_scores"
    __table_args__ = (
        UniqueConstraint("user_id", "score_date", name="uq_recovery_score_user_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    score_date: Mapped[date]
    daily_score: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
