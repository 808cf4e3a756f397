from typing import Optional
from datetime import date, datetime, time
from sqlalchemy import String, Boolean, Date, DateTime, ForeignKey, Index, Time, func
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.db.database import Base, generate_uuid


class ScheduledShifts(Base):
    __tablename__ = "scheduled_shifts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    shift_date: Mapped[date] = mapped_column(Date, nullable=False)
    template_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("shift_templates.id", ondelete="SET NULL"), nullable=True)
    worker_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("workers.id"), nullable=True)
    location_id: Mapped[str] = mapped_column(String(36), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False)
    position_id: Mapped[str] = mapped_column(String(36), ForeignKey("positions.id"), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_recurring_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_scheduled_shifts_location_date", "location_id", "shift_date"),
        Index("ix_scheduled_shifts_worker_date", "worker_id", "shift_date"),
    )
