"""Module: appointment."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vetclinic.db.base import Base


# Flowboard appointment. patient_id/doctor_id are plain integer references:
# cascades are applied by the store, not by database constraints.
class AppointmentRow(Base):
    __tablename__ = "appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    patient_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    doctor_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="scheduled")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
