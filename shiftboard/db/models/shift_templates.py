from typing import Optional
from enum import Enum
from datetime import datetime, time
from sqlalchemy import String, DateTime, ForeignKey, JSON, Time, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.db.database import Base, generate_uuid


class LeadType(str, Enum):
    OPENING = "opening"
    CLOSING = "closing"


class ShiftTemplates(Base):
    __tablename__ = "shift_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    location_id: Mapped[str] = mapped_column(String(36), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    position_id: Mapped[str] = mapped_column(String(36), ForeignKey("positions.id"), nullable=False)
    days_of_week: Mapped[list] = mapped_column(JSON, nullable=False)  # ["monday", "tuesday", ...]
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    lead_type: Mapped[Optional[LeadType]] = mapped_column(SQLEnum(LeadType, name="lead_type_enum"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
