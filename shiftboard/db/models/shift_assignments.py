from typing import Optional
from enum import Enum
from datetime import datetime, time
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Time, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.db.database import Base, generate_uuid


class AssignmentType(str, Enum):
    LEAD = "lead"
    REGULAR = "regular"
    TRAINING = "training"


class ShiftAssignments(Base):
    __tablename__ = "shift_assignments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    scheduled_shift_id: Mapped[str] = mapped_column(String(36), ForeignKey("scheduled_shifts.id", ondelete="CASCADE"), nullable=False, index=True)
    worker_id: Mapped[str] = mapped_column(String(36), ForeignKey("workers.id"), nullable=False, index=True)
    assignment_type: Mapped[AssignmentType] = mapped_column(SQLEnum(AssignmentType, name="assignment_type_enum"), nullable=False)
    is_manual_override: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_start: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    assigned_end: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
