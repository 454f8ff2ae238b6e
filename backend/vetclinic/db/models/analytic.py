"""Module: analytic."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from vetclinic.db.base import Base


# Daily clinic metrics; by convention one row per calendar day.
class AnalyticRow(Base):
    __tablename__ = "analytics"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    # {"checkup": 35, "vaccination": 28, ...}
    appointment_counts: Mapped[dict] = mapped_column(JSON, nullable=False)
    # {"current": [...], "previous": [...]}
    checkins: Mapped[dict] = mapped_column(JSON, nullable=False)
    revenue: Mapped[float | None] = mapped_column(Float, nullable=True)
    wait_time: Mapped[float | None] = mapped_column(Float, nullable=True)
