from typing import Optional
from sqlalchemy import String, Boolean, Float, DateTime, JSON, func, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from enum import Enum
from shiftboard.db.database import Base, generate_uuid

class JobLevel(str, Enum):
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"
    L6 = "L6"
    L7 = "L7"

class Workers(Base):
    __tablename__ = "workers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    preferred_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    job_level: Mapped[JobLevel] = mapped_column(SQLEnum(JobLevel, name="job_level_enum"), nullable=False)
    is_lead: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # {"monday": ["morning", "afternoon"], ...}
    availability: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    preferred_hours_per_week: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    inactive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
