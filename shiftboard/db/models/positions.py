from sqlalchemy import String, DateTime, func
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from shiftboard.db.database import Base, generate_uuid

class Positions(Base):
    __tablename__ = "positions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
