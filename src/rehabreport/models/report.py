import enum
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rehabreport.database import Base


class ReportPeriod(str, enum.Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class ReportSnapshot(Base):
    """Materialized report for one exact covered range. Never updated."""

    __tablename__ = "report_snapshots"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "period", "range_start", "range_end", name="uq_report_snapshot_range"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    period: Mapped[str] = mapped_column(String(20))  # WEEKLY, MONTHLY
    range_start: Mapped[date]
    range_end: Mapped[date]

    covered_range: Mapped[str] = mapped_column(Text)  # JSON: {"start": ..., "end": ...}
    weekly_highlight: Mapped[str | None] = mapped_column(Text, default=None)  # JSON string
    metrics: Mapped[str | None] = mapped_column(Text, default=None)  # JSON
    recovery_prediction: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"))

    generated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
