from datetime import time
from sqlalchemy import String, ForeignKey, Time, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.db.database import Base, generate_uuid
from shiftboard.db.models.shift_assignments import AssignmentType


class RecurringShiftAssignments(Base):
    __tablename__ = "recurring_shift_assignments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    worker_id: Mapped[str] = mapped_column(String(36), ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    location_id: Mapped[str] = mapped_column(String(36), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    position_id: Mapped[str] = mapped_column(String(36), ForeignKey("positions.id"), nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    assignment_type: Mapped[AssignmentType] = mapped_column(
        SQLEnum(AssignmentType, name="assignment_type_enum"), nullable=False, default=AssignmentType.REGULAR
    )
