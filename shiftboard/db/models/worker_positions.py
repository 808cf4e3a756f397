from sqlalchemy import String, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column
from shiftboard.db.database import Base

class WorkerPositions(Base):
    __tablename__ = "worker_positions"

    worker_id: Mapped[str] = mapped_column(String(36), ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    position_id: Mapped[str] = mapped_column(String(36), ForeignKey("positions.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("worker_id", "position_id"),
    )
