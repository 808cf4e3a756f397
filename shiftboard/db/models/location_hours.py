from datetime import time
from sqlalchemy import String, ForeignKey, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.db.database import Base, generate_uuid


class LocationHours(Base):
    __tablename__ = "location_hours"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    location_id: Mapped[str] = mapped_column(String(36), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)  # "monday".."sunday"
    day_start: Mapped[time] = mapped_column(Time, nullable=False)
    day_end: Mapped[time] = mapped_column(Time, nullable=False)
    morning_cutoff: Mapped[time] = mapped_column(Time, nullable=False)

    __table_args__ = (
        UniqueConstraint("location_id", "day_of_week", name="uq_location_hours_day"),
    )
